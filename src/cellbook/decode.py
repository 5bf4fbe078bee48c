from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Optional, TypeVar

from .config import CodecOptions
from .infer import infer
from .model import Cell, CellEntry, CodeCell, MarkdownCell, Notebook

logger = logging.getLogger("cellbook.decode")

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised when notebook text is not JSON or not a JSON object."""


class _Malformed(Exception):
    """A value does not have the shape its field requires."""


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise _Malformed(f"expected string, got {type(value).__name__}")
    return value


def _mapping(value: Any) -> dict:
    if not isinstance(value, dict):
        raise _Malformed(f"expected object, got {type(value).__name__}")
    return value


def _sequence(value: Any, item: Callable[[Any], T]) -> List[T]:
    """Decode every element or fail as a whole; partial lists never escape."""
    if not isinstance(value, list):
        raise _Malformed(f"expected array, got {type(value).__name__}")
    return [item(v) for v in value]


def _field(obj: dict, key: str, decoder: Callable[[Any], T], default: T, where: str) -> T:
    """Decode obj[key], substituting default when absent or malformed."""
    if key not in obj:
        return default
    try:
        return decoder(obj[key])
    except _Malformed as exc:
        logger.debug("%s%s: %s; using default", where, key, exc)
        return default


def _output_text(value: Any) -> str:
    out = _mapping(value)
    if "text" not in out:
        raise _Malformed("output without text")
    return _string(out["text"])


def _cell(value: Any, where: str) -> Cell:
    payload = _mapping(value)
    meta = _field(payload, "metadata", _mapping, {}, where)
    tags = _field(meta, "tags", lambda v: _sequence(v, _string), [], where + "metadata.")
    source = _field(payload, "source", lambda v: _sequence(v, _string), [], where)
    if payload.get("cell_type") == "code":
        outputs = _field(payload, "outputs", lambda v: _sequence(v, _output_text), [], where)
        return CodeCell(tags=tags, source=source, outputs=outputs)
    return MarkdownCell(tags=tags, source=source)


def _cell_entry(value: Any) -> CellEntry:
    entry = _mapping(value)
    if "cell" not in entry:
        raise _Malformed("cell entry without cell payload")
    cell_id = entry.get("cell_id")
    if not isinstance(cell_id, str):
        cell_id = ""
    return CellEntry(id=cell_id, cell=_cell(entry["cell"], "cells[].cell."))


def decode(text: str, options: Optional[CodecOptions] = None) -> Notebook:
    """Decode notebook JSON text into an inferred Notebook.

    Optional fields that are missing or malformed take their defaults; a list
    with any bad element is replaced by its default as a whole. Only invalid
    JSON or a non-object document raises DecodeError.
    """
    opts = options or CodecOptions()
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid notebook JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise DecodeError(f"Notebook must be a JSON object, got {type(doc).__name__}")

    nb = Notebook(
        title=_field(doc, "title", _string, "", ""),
        kernel=_field(doc, "kernel", _string, opts.default_kernel, ""),
        authors=_field(doc, "authors", lambda v: _sequence(v, _string), [], ""),
        cells=_field(doc, "cells", lambda v: _sequence(v, _cell_entry), [], ""),
    )
    return infer(nb, preserve_title=opts.preserve_title)
