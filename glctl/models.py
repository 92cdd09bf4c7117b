"""Data models, constants and exceptions for glctl."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_URL = "https://gitlab.com"
API_V4 = "/api/v4"

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 100

OUTPUT_FORMATS = ("simple", "path")
DEFAULT_OUTPUT = "simple"
SORT_ORDERS = ("asc", "desc")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GlctlError(Exception):
    """Base error for glctl."""


class UsageError(GlctlError):
    """Raised when a command is invoked with missing or invalid arguments."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EntryType(Enum):
    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"  # submodule


# ---------------------------------------------------------------------------
# API objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TreeEntry:
    """One file or directory node of a repository tree."""

    id: str
    name: str
    type: EntryType
    path: str
    mode: str = ""

    @classmethod
    def from_api(cls, data: dict) -> TreeEntry:
        return cls(
            id=data["id"],
            name=data["name"],
            type=EntryType(data["type"]),
            path=data["path"],
            mode=data.get("mode", ""),
        )


@dataclass(frozen=True)
class Project:
    id: int
    path: str
    name: str
    web_url: str
    default_branch: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> Project:
        return cls(
            id=data["id"],
            path=data["path_with_namespace"],
            name=data["name"],
            web_url=data.get("web_url", ""),
            default_branch=data.get("default_branch"),
        )


@dataclass(frozen=True)
class Group:
    id: int
    path: str
    name: str
    web_url: str

    @classmethod
    def from_api(cls, data: dict) -> Group:
        return cls(
            id=data["id"],
            path=data["full_path"],
            name=data["name"],
            web_url=data.get("web_url", ""),
        )


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A single page of a paginated listing.

    ``has_more`` is the explicit end-of-data signal; callers must not infer it
    from the number of items returned.
    """

    items: list[T]
    number: int
    has_more: bool


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


@dataclass
class Pagination:
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    fetch_all: bool = False
    sort: str | None = None

    def fetch_all_pages(self) -> None:
        """Reset paging for a full walk. Overrides any page/size given by the caller."""
        if self.fetch_all:
            self.per_page = MAX_PER_PAGE
            self.page = DEFAULT_PAGE

    def to_params(self) -> dict:
        params = {"page": self.page, "per_page": self.per_page}
        if self.sort:
            params["sort"] = self.sort
        return params

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> Pagination:
        return cls(
            page=getattr(args, "page", DEFAULT_PAGE),
            per_page=getattr(args, "per_page", DEFAULT_PER_PAGE),
            fetch_all=getattr(args, "all", False),
            sort=getattr(args, "sort", None),
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def require_identifier(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise UsageError(message)
    return value.strip()


@dataclass
class FileListOptions:
    """Options for ``get files``. Constructed once per invocation."""

    project: str = ""
    path: str | None = None
    ref: str | None = None
    recursive: bool = True
    raw: bool = False
    output: str = DEFAULT_OUTPUT
    pagination: Pagination = field(default_factory=Pagination)

    def __post_init__(self):
        # An empty ref means "use the default branch"
        self.ref = _blank_to_none(self.ref)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> FileListOptions:
        return cls(
            project=args.project or "",
            path=args.path,
            ref=args.ref,
            recursive=args.recursive,
            raw=args.raw,
            output=args.output,
            pagination=Pagination.from_args(args),
        )

    def validate(self) -> None:
        self.project = require_identifier(self.project, "please enter project name and id")
        self.path = _blank_to_none(self.path)
        if self.path is not None:
            self.path = self.path.strip()
        if self.raw and self.path is None:
            raise UsageError("--raw requires a file path (--path)")
