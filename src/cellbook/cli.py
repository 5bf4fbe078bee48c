from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import CodecOptions, ConfigError, load_options
from .decode import DecodeError
from .encode import encode
from .files import read_notebook, write_notebook
from .ids import normalize_id
from .jupyter import export_ipynb_text, import_ipynb_text
from .model import cell_kind, tags_of

logger = logging.getLogger("cellbook.cli")


def _emit(text: str, out_path: Optional[str]) -> None:
    if out_path:
        Path(out_path).write_text(text, encoding="utf-8")
        logger.info("Wrote %s", out_path)
    else:
        print(text, end="")


def _cmd_convert(path: Path, out_path: Optional[str], opts: CodecOptions) -> int:
    nb = read_notebook(path, opts)
    _emit(encode(nb) + "\n", out_path)
    return 0


def _cmd_show(path: Path, opts: CodecOptions) -> int:
    nb = read_notebook(path, opts)
    print(f"title: {nb.title}")
    print(f"kernel: {nb.kernel}")
    if nb.authors:
        print(f"authors: {', '.join(nb.authors)}")
    for entry in nb.cells:
        tags = ",".join(tags_of(entry.cell))
        print(f"{entry.id}\t{cell_kind(entry.cell)}\t{tags}".rstrip())
    return 0


def _cmd_export(path: Path, out_path: Optional[str], opts: CodecOptions) -> int:
    nb = read_notebook(path, opts)
    _emit(export_ipynb_text(nb), out_path)
    return 0


def _cmd_import(path: Path, out_path: Optional[str], opts: CodecOptions) -> int:
    nb = import_ipynb_text(path.read_text(encoding="utf-8"), opts)
    logger.info("Imported %s (%d cells)", path, len(nb.cells))
    if out_path:
        write_notebook(out_path, nb)
    else:
        print(encode(nb))
    return 0


def _cmd_id(texts: list[str]) -> int:
    for t in texts:
        print(normalize_id(t))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="cellbook", description="Notebook JSON codec")
    parser.add_argument("--config", help="YAML file with codec options")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_convert = sub.add_parser("convert", help="Decode a notebook and print its canonical JSON")
    p_convert.add_argument("file")
    p_convert.add_argument("-o", "--output", help="Output file (default: stdout)")

    p_show = sub.add_parser("show", help="Print title, kernel and cell ids")
    p_show.add_argument("file")

    p_export = sub.add_parser("export", help="Export a notebook to .ipynb")
    p_export.add_argument("file", help="Input notebook JSON file")
    p_export.add_argument("-o", "--output", help="Output .ipynb file (default: stdout)")

    p_import = sub.add_parser("import", help="Import a .ipynb file")
    p_import.add_argument("file", help="Input .ipynb file")
    p_import.add_argument("-o", "--output", help="Output notebook file (default: stdout)")

    p_id = sub.add_parser("id", help="Normalize text into cell ids")
    p_id.add_argument("texts", nargs="+")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        opts = load_options(args.config) if args.config else CodecOptions()
        cmd = args.cmd
        if cmd == "id":
            return _cmd_id(args.texts)
        path = Path(args.file)
        if cmd == "convert":
            return _cmd_convert(path, args.output, opts)
        if cmd == "show":
            return _cmd_show(path, opts)
        if cmd == "export":
            return _cmd_export(path, args.output, opts)
        if cmd == "import":
            return _cmd_import(path, args.output, opts)
    # UnicodeDecodeError is a ValueError, not a DecodeError
    except (DecodeError, ConfigError, OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
