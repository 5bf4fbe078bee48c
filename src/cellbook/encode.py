from __future__ import annotations

import json
import re
from typing import Dict, List

from .model import Cell, CodeCell, Notebook, tags_of, source_of

NBFORMAT = 4
NBFORMAT_MINOR = 5

# json decoding combines valid pairs, so any surrogate left in a str is lone
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def escape_lone_surrogates(text: str) -> str:
    """Escape lone surrogates as \\uXXXX so the JSON text encodes as UTF-8."""
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text)


def _output_to_json(text: str) -> Dict:
    return {"output_type": "stream", "name": "stdout", "text": text}


def _cell_to_json(cell: Cell) -> Dict:
    tags = tags_of(cell)
    # no "tags": [] on untagged cells
    meta: Dict = {"tags": list(tags)} if tags else {}
    out: Dict = {"metadata": meta, "source": list(source_of(cell))}
    if isinstance(cell, CodeCell):
        out["outputs"] = [_output_to_json(t) for t in cell.outputs]
    return out


def notebook_to_json(nb: Notebook) -> Dict:
    """Build the canonical JSON tree; dict insertion order is the key order."""
    cells: List[Dict] = [
        {"cell_id": entry.id, "cell": _cell_to_json(entry.cell)} for entry in nb.cells
    ]
    return {
        "metadata": {"kernel_info": {"name": nb.kernel}},
        "nbformat": NBFORMAT,
        "nbformat_minor": NBFORMAT_MINOR,
        "cells": cells,
    }


def encode(nb: Notebook) -> str:
    """Serialize a Notebook as canonical JSON with 2-space indentation.

    title and authors are not part of the encoded form.
    """
    text = json.dumps(notebook_to_json(nb), indent=2, ensure_ascii=False)
    return escape_lone_surrogates(text)
