from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import CodecOptions
from .decode import decode
from .encode import encode
from .model import Notebook

logger = logging.getLogger("cellbook.files")


def read_notebook(path: str | Path, options: Optional[CodecOptions] = None) -> Notebook:
    text = Path(path).read_text(encoding="utf-8")
    nb = decode(text, options)
    logger.info("Read notebook %s (%d cells)", path, len(nb.cells))
    return nb


def write_notebook(path: str | Path, nb: Notebook) -> None:
    Path(path).write_text(encode(nb) + "\n", encoding="utf-8")
    logger.info("Wrote notebook %s (%d cells)", path, len(nb.cells))
