from __future__ import annotations

from typing import Any, Dict, List, Optional

import nbformat
from nbformat.reader import parse_json
from nbformat.validator import ValidationError
from nbformat.v4 import new_code_cell, new_markdown_cell, new_notebook, new_output

from .config import CodecOptions
from .decode import DecodeError
from .encode import NBFORMAT_MINOR, escape_lone_surrogates
from .infer import infer
from .model import Cell, CellEntry, CodeCell, MarkdownCell, Notebook, source_of, tags_of


def _joined(value: Any) -> str:
    # nbformat keeps multiline strings either joined or as a list of lines
    if isinstance(value, list):
        return "".join(str(v) for v in value)
    return "" if value is None else str(value)


def _split_lines(text: str) -> List[str]:
    """Split after each "\\n" only; other line breaks stay inside a line."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    return lines if lines[-1] else lines[:-1]


def _cell_to_nb(entry: CellEntry) -> nbformat.NotebookNode:
    meta: Dict = {}
    tags = tags_of(entry.cell)
    if tags:
        meta["tags"] = list(tags)
    source = "".join(source_of(entry.cell))
    if isinstance(entry.cell, CodeCell):
        outputs = [
            new_output("stream", name="stdout", text=text) for text in entry.cell.outputs
        ]
        return new_code_cell(
            source=source, id=entry.id, metadata=meta, outputs=outputs, execution_count=None
        )
    return new_markdown_cell(source=source, id=entry.id, metadata=meta)


def to_ipynb(nb: Notebook) -> nbformat.NotebookNode:
    """Convert a Notebook to an nbformat 4.5 notebook node.

    - kernel -> metadata.kernelspec (name and display_name)
    - non-empty title -> metadata.title; authors -> metadata.authors[].name
    - cell ids are kept as nbformat cell ids; tags -> cell.metadata.tags
    - code outputs become stdout stream outputs

    Cell ids must already be normalized (see infer); nbformat rejects others.
    """
    metadata: Dict = {"kernelspec": {"name": nb.kernel, "display_name": nb.kernel}}
    if nb.title:
        metadata["title"] = nb.title
    if nb.authors:
        metadata["authors"] = [{"name": a} for a in nb.authors]
    node = new_notebook(nbformat_minor=NBFORMAT_MINOR, metadata=metadata)
    # attached after construction: duplicate cell ids are allowed here
    node.cells = [_cell_to_nb(entry) for entry in nb.cells]
    return node


def _stdout_texts(outputs: Any) -> List[str]:
    texts: List[str] = []
    if not isinstance(outputs, list):
        return texts
    for out in outputs:
        if not isinstance(out, dict):
            continue
        if out.get("output_type") == "stream" and out.get("name") == "stdout":
            texts.append(_joined(out.get("text")))
    return texts


def from_ipynb(d: Dict, options: Optional[CodecOptions] = None) -> Notebook:
    """Convert an nbformat v4 dict (or NotebookNode) to a Notebook.

    - 'code' cells -> CodeCell keeping only stdout stream outputs
    - 'markdown', 'raw' and unknown types -> MarkdownCell
    - source strings are split after each "\\n", keeping line endings
    - metadata.title is kept; otherwise the title is inferred from the first cell
    """
    opts = options or CodecOptions()
    meta = d.get("metadata", {}) if isinstance(d, dict) else {}
    if not isinstance(meta, dict):
        meta = {}
    ks = meta.get("kernelspec", {})
    kernel = ks.get("name") if isinstance(ks, dict) else None
    title = meta.get("title")
    authors_in = meta.get("authors")
    authors: List[str] = []
    if isinstance(authors_in, list):
        for a in authors_in:
            if isinstance(a, dict) and isinstance(a.get("name"), str):
                authors.append(a["name"])

    cells_in = d.get("cells", []) if isinstance(d, dict) else []
    cells: List[CellEntry] = []
    for jc in cells_in if isinstance(cells_in, list) else []:
        if not isinstance(jc, dict):
            continue
        source = _split_lines(_joined(jc.get("source")))
        jmeta = jc.get("metadata", {})
        tags: List[str] = []
        if isinstance(jmeta, dict) and isinstance(jmeta.get("tags"), list):
            tags = [str(t) for t in jmeta["tags"]]
        cell: Cell
        if jc.get("cell_type") == "code":
            cell = CodeCell(tags=tags, source=source, outputs=_stdout_texts(jc.get("outputs")))
        else:
            cell = MarkdownCell(tags=tags, source=source)
        cid = jc.get("id")
        cells.append(CellEntry(id=cid if isinstance(cid, str) else "", cell=cell))

    nb = Notebook(
        title=title if isinstance(title, str) else "",
        kernel=kernel if isinstance(kernel, str) and kernel else opts.default_kernel,
        authors=authors,
        cells=cells,
    )
    return infer(nb, preserve_title=True)


def export_ipynb_text(nb: Notebook) -> str:
    s = escape_lone_surrogates(nbformat.writes(to_ipynb(nb), version=4))
    if not s.endswith("\n"):
        s += "\n"
    return s


def import_ipynb_text(text: str, options: Optional[CodecOptions] = None) -> Notebook:
    """Read .ipynb text; anything nbformat cannot read as a notebook raises DecodeError."""
    try:
        data = parse_json(text)
    except ValueError as exc:
        raise DecodeError(f"Invalid .ipynb JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"Notebook must be a JSON object, got {type(data).__name__}")
    try:
        node = nbformat.reads(text, as_version=4)
    # upgrading malformed legacy versions can fail with KeyError/AttributeError
    except (ValueError, ValidationError, KeyError, AttributeError) as exc:
        raise DecodeError(f"Invalid .ipynb notebook: {exc}") from exc
    return from_ipynb(node, options)
