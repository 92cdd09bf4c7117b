"""Render command results to an output stream."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from glctl.models import OUTPUT_FORMATS, Group, Project, TreeEntry


def _table(rows: Sequence[Sequence[str]], out: TextIO) -> None:
    if len(rows) <= 1:
        # Header only
        return
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    for row in rows:
        line = "  ".join(cell.ljust(width) for cell, width in zip(row, widths))
        out.write(line.rstrip() + "\n")


def _check_format(fmt: str) -> None:
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"unknown output format: {fmt!r}")


def print_files(fmt: str, entries: Sequence[TreeEntry], out: TextIO | None = None) -> None:
    """Print tree entries in the order given."""
    _check_format(fmt)
    out = out or sys.stdout
    if fmt == "path":
        for entry in entries:
            out.write(f"{entry.path}\n")
        return
    rows = [("TYPE", "ID", "PATH")]
    rows.extend((entry.type.value, entry.id, entry.path) for entry in entries)
    _table(rows, out)


def print_projects(fmt: str, projects: Sequence[Project], out: TextIO | None = None) -> None:
    _check_format(fmt)
    out = out or sys.stdout
    if fmt == "path":
        for project in projects:
            out.write(f"{project.path}\n")
        return
    rows = [("ID", "PATH", "DEFAULT BRANCH", "URL")]
    rows.extend((str(p.id), p.path, p.default_branch or "-", p.web_url) for p in projects)
    _table(rows, out)


def print_groups(fmt: str, groups: Sequence[Group], out: TextIO | None = None) -> None:
    _check_format(fmt)
    out = out or sys.stdout
    if fmt == "path":
        for group in groups:
            out.write(f"{group.path}\n")
        return
    rows = [("ID", "PATH", "NAME", "URL")]
    rows.extend((str(g.id), g.path, g.name, g.web_url) for g in groups)
    _table(rows, out)


def write_raw(data: bytes, out: TextIO | None = None) -> None:
    """Write bytes verbatim, going through the binary buffer when the stream has one."""
    out = out or sys.stdout
    buffer = getattr(out, "buffer", None)
    if buffer is not None:
        out.flush()
        buffer.write(data)
        buffer.flush()
    else:
        out.write(data.decode("utf-8", errors="replace"))
