"""Repository file editing."""

from __future__ import annotations

import argparse
import base64
import sys
from pathlib import Path

from glctl.commands.base import Command, register_command
from glctl.models import UsageError, require_identifier


@register_command("edit", "file", aliases=("f", "files"))
class EditFileCommand(Command):
    """Replace the content of a repository file and commit the change."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project", nargs="?", help="Project path (e.g. group/project), id or URL")
        parser.add_argument("--path", "-p", default=None, help="Path of the file inside the repository")
        parser.add_argument(
            "--ref", default="", help="Branch to commit to. The default branch is used when not given."
        )
        parser.add_argument(
            "--file",
            "-f",
            dest="source",
            default="-",
            help="Local file with the new content, '-' reads stdin (default: -)",
        )
        parser.add_argument("--message", "-m", default=None, help="Commit message (default: 'Update <path>')")

    def validate(self) -> None:
        self.project = require_identifier(self.args.project, "please enter project name and id")
        self.path = require_identifier(self.args.path, "please enter the file path (--path)")
        if self.args.source != "-" and not Path(self.args.source).is_file():
            raise UsageError(f"local file not found: {self.args.source}")

    def run(self) -> None:
        branch = self.args.ref.strip() or self.client.default_branch(self.project)
        current = self.client.get_file(self.project, self.path, branch)
        content, encoding = self._read_content()
        message = self.args.message or f"Update {self.path}"

        self.client.update_file(
            self.project,
            self.path,
            branch=branch,
            content=content,
            commit_message=message,
            last_commit_id=current.get("last_commit_id"),
            encoding=encoding,
        )
        if self.client.dry_run:
            self.out.write(f"file ({self.path}) would be updated on branch ({branch})\n")
            return
        self.out.write(f"file ({self.path}) updated on branch ({branch})\n")

    def _read_content(self) -> tuple[str, str | None]:
        """Return the new content and the encoding to send it with (base64 for binary data)."""
        if self.args.source == "-":
            stdin = getattr(sys.stdin, "buffer", None)
            data = stdin.read() if stdin is not None else sys.stdin.read().encode("utf-8")
        else:
            data = Path(self.args.source).read_bytes()
        try:
            return data.decode("utf-8"), None
        except UnicodeDecodeError:
            return base64.b64encode(data).decode("ascii"), "base64"
