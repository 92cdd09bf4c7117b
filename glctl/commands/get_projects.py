"""Show one project or list projects."""

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
from glctl.models import Pagination
from glctl.printers import print_projects


@register_command("get", "projects", aliases=("p", "project"))
class GetProjectsCommand(Command):
    """Show a project by path or id, or list the projects visible to you."""

    def __init__(self, client, args, out=None):
        super().__init__(client, args, out)
        self.project = (args.project or "").strip()
        self.pagination = Pagination.from_args(args)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project", nargs="?", help="Project path, id or URL. Lists projects when omitted.")
        parser.add_argument("--owned", action="store_true", help="Only list projects owned by the current user")
        parser.add_argument("--search", default=None, help="Only list projects matching this search term")
        add_pagination_arguments(parser)
        add_sort_argument(parser)
        add_output_argument(parser)

    def validate(self) -> None:
        # Listing needs no identifier
        pass

    def run(self) -> None:
        if self.project:
            projects = [self.client.get_project(self.project)]
        else:
            projects = collect_pages(
                lambda pagination: self.client.list_projects(
                    pagination, owned=self.args.owned, search=self.args.search
                ),
                self.pagination,
            )
        print_projects(self.args.output, projects, self.out)
