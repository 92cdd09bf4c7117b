"""Show one group or list groups."""

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
from glctl.printers import print_groups


@register_command("get", "groups", aliases=("g", "group"))
class GetGroupsCommand(Command):
    """Show a group by path or id, or list groups."""

    def __init__(self, client, args, out=None):
        super().__init__(client, args, out)
        self.group = (args.group or "").strip()
        self.pagination = Pagination.from_args(args)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("group", nargs="?", help="Group path, id or URL. Lists groups when omitted.")
        parser.add_argument(
            "--all-available",
            action="store_true",
            help="List all groups visible to the user, not only those they are a member of",
        )
        parser.add_argument("--search", default=None, help="Only list groups matching this search term")
        add_pagination_arguments(parser)
        add_sort_argument(parser)
        add_output_argument(parser)

    def validate(self) -> None:
        pass

    def run(self) -> None:
        if self.group:
            groups = [self.client.get_group(self.group)]
        else:
            groups = collect_pages(
                lambda pagination: self.client.list_groups(
                    pagination, all_available=self.args.all_available, search=self.args.search
                ),
                self.pagination,
            )
        print_groups(self.args.output, groups, self.out)
