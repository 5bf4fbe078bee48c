from __future__ import annotations

from dataclasses import replace

from .ids import normalize_id
from .model import CellEntry, Notebook, source_of


def _first_line(entry: CellEntry) -> str:
    src = source_of(entry.cell)
    return src[0] if src else ""


def infer_cell_ids(nb: Notebook) -> Notebook:
    """Normalize every cell id, deriving missing ones from the first source line."""
    cells = [
        CellEntry(id=normalize_id(entry.id or _first_line(entry)), cell=entry.cell)
        for entry in nb.cells
    ]
    return replace(nb, cells=cells)


def infer_title(nb: Notebook, *, preserve_title: bool = False) -> Notebook:
    """Derive the title from the first line of the first cell.

    An existing non-empty title is cleared unless preserve_title is set.
    """
    if nb.title:
        return nb if preserve_title else replace(nb, title="")
    title = _first_line(nb.cells[0]).strip() if nb.cells else ""
    return replace(nb, title=title)


def infer(nb: Notebook, *, preserve_title: bool = False) -> Notebook:
    return infer_title(infer_cell_ids(nb), preserve_title=preserve_title)
