from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class MarkdownCell:
    """A prose cell. source: text lines as found in the document."""

    tags: List[str] = field(default_factory=list)
    source: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CodeCell:
    """A code cell.

    outputs: captured stdout fragments, one string per stream output.
    """

    tags: List[str] = field(default_factory=list)
    source: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)


Cell = Union[MarkdownCell, CodeCell]


@dataclass(frozen=True)
class CellEntry:
    id: str
    cell: Cell


@dataclass(frozen=True)
class Notebook:
    """A decoded notebook.

    cells: ordered list of CellEntry in document order.
    Ids and title are only normalized by the inference pass (see infer.py);
    values built by hand are taken as given.

    Frozen only shallowly: list fields stay plain lists. cellbook never
    mutates them in place, and transforms return new values that may share
    unchanged lists with their input, so callers must not mutate them either.
    """

    title: str = ""
    kernel: str = "python3"
    authors: List[str] = field(default_factory=list)
    cells: List[CellEntry] = field(default_factory=list)


def source_of(cell: Cell) -> List[str]:
    if isinstance(cell, CodeCell):
        return cell.source
    if isinstance(cell, MarkdownCell):
        return cell.source
    raise TypeError(f"not a notebook cell: {cell!r}")


def tags_of(cell: Cell) -> List[str]:
    if isinstance(cell, CodeCell):
        return cell.tags
    if isinstance(cell, MarkdownCell):
        return cell.tags
    raise TypeError(f"not a notebook cell: {cell!r}")


def cell_kind(cell: Cell) -> str:
    """Return the wire name of the cell variant: 'code' or 'markdown'."""
    if isinstance(cell, CodeCell):
        return "code"
    if isinstance(cell, MarkdownCell):
        return "markdown"
    raise TypeError(f"not a notebook cell: {cell!r}")
