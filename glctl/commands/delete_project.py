"""Project deletion."""

from __future__ import annotations

import argparse

from glctl.commands.base import Command, register_command
from glctl.models import require_identifier


@register_command("delete", "project", aliases=("p", "projects"))
class DeleteProjectCommand(Command):
    """Delete a GitLab project by specifying its full path or id."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project", nargs="?", help="Project path (e.g. group/project), id or URL")

    def validate(self) -> None:
        self.project = require_identifier(self.args.project, "please enter project name and id")

    def run(self) -> None:
        project = self.client.get_project(self.project)
        self.client.delete_project(project.id)
        if self.client.dry_run:
            self.out.write(f"project ({self.project}) with id ({project.id}) would be deleted\n")
            return
        self.logger.debug(f"Deleted project {project.path} (id={project.id})")
        self.out.write(f"project ({self.project}) with id ({project.id}) has been deleted\n")
