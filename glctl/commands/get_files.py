"""List a project's repository tree or print one file's raw content."""

from __future__ import annotations

import argparse

from glctl.commands.base import (
    Command,
    add_output_argument,
    add_pagination_arguments,
    add_sort_argument,
    collect_pages,
    register_command,
)
from glctl.models import FileListOptions, TreeEntry
from glctl.printers import print_files, write_raw


@register_command("get", "files", aliases=("f", "file"))
class GetFilesCommand(Command):
    """List files of a project repository, or print a single file with --raw."""

    def __init__(self, client, args, out=None):
        super().__init__(client, args, out)
        self.options = FileListOptions.from_args(args)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project", nargs="?", help="Project path (namespace/name), id or URL")
        parser.add_argument(
            "--ref", default="", help="Branch or tag name. The default branch is used when not given."
        )
        parser.add_argument(
            "--path", "-p", default=None, help="Path inside the repository. Used to list subdirectories."
        )
        parser.add_argument(
            "--recursive",
            "-r",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="List the tree recursively (default: true)",
        )
        parser.add_argument("--raw", action="store_true", help="Print the raw content of the file at --path")
        add_pagination_arguments(parser)
        add_sort_argument(parser)
        add_output_argument(parser)

    def validate(self) -> None:
        self.options.validate()

    def run(self) -> None:
        opts = self.options
        if opts.raw:
            data = self.client.get_raw_file(opts.project, opts.path, ref=opts.ref)
            write_raw(data, self.out)
            return

        entries = self.list_entries()
        self.logger.debug(f"Fetched {len(entries)} entries from {opts.project}")
        print_files(opts.output, entries, self.out)

    def list_entries(self) -> list[TreeEntry]:
        opts = self.options
        return collect_pages(
            lambda pagination: self.client.list_tree(
                opts.project,
                pagination,
                path=opts.path,
                ref=opts.ref,
                recursive=opts.recursive,
            ),
            opts.pagination,
        )
