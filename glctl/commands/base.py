"""Base class, registry and shared helpers for commands."""

from __future__ import annotations

import argparse
import logging
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, TextIO, TypeVar

import requests

from glctl.models import (
    DEFAULT_OUTPUT,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    OUTPUT_FORMATS,
    SORT_ORDERS,
    Page,
    Pagination,
)

if TYPE_CHECKING:
    from glctl.client import GitLabClient

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

# verb -> resource -> command class
_command_registry: dict[str, dict[str, type[Command]]] = {}


def register_command(verb: str, resource: str, aliases: tuple[str, ...] = ()):
    """Decorator to register a command class as ``glctl <verb> <resource>``."""

    def decorator(cls):
        _command_registry.setdefault(verb, {})[resource] = cls
        cls.verb = verb
        cls.resource = resource
        cls.aliases = aliases
        return cls

    return decorator


def get_command_registry() -> dict[str, dict[str, type[Command]]]:
    """Get the command registry."""
    return _command_registry


# ---------------------------------------------------------------------------
# Shared arguments
# ---------------------------------------------------------------------------


def add_pagination_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int, default=DEFAULT_PAGE, help=f"Page to fetch (default: {DEFAULT_PAGE})")
    parser.add_argument(
        "--per-page",
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f"Number of items per page (default: {DEFAULT_PER_PAGE})",
    )
    parser.add_argument(
        "--all",
        "-A",
        action="store_true",
        help="Fetch every page. Ignores --page and --per-page.",
    )


def add_sort_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--sort", choices=SORT_ORDERS, default=None, help="Sort order (asc or desc)")


def add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        "-o",
        choices=OUTPUT_FORMATS,
        default=DEFAULT_OUTPUT,
        help=f"Output format (default: {DEFAULT_OUTPUT})",
    )


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def collect_pages(fetch: Callable[[Pagination], Page[T]], pagination: Pagination) -> list[T]:
    """
    Fetch one page, or every page when ``pagination.fetch_all`` is set, and
    return the items in the order received.

    A page that fails to load ends the walk: whatever was collected before the
    failure is returned as the result.
    """
    logger = logging.getLogger("glctl")
    pagination.fetch_all_pages()

    items: list[T] = []
    while True:
        try:
            page = fetch(pagination)
        except requests.RequestException as e:
            logger.warning(f"Stopped at page {pagination.page}, returning {len(items)} items: {e}")
            break
        logger.debug(f"Fetched page {page.number}: {len(page.items)} items")
        items.extend(page.items)
        if not page.items or not page.has_more or not pagination.fetch_all:
            break
        pagination.page += 1
    return items


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class Command(ABC):
    """Base class for all commands."""

    verb: str = ""
    resource: str = ""
    aliases: tuple[str, ...] = ()

    def __init__(self, client: GitLabClient, args: argparse.Namespace, out: TextIO | None = None):
        self.client = client
        self.args = args
        self.out = out or sys.stdout
        self.logger = logging.getLogger("glctl")

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific CLI arguments."""
        ...

    @abstractmethod
    def validate(self) -> None:
        """Check the arguments. Raises UsageError; must not call the API."""
        ...

    @abstractmethod
    def run(self) -> None:
        """Execute the command and write its output."""
        ...
