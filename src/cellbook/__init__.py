"""cellbook: lenient notebook JSON decoding and canonical encoding.

Decoding tolerates missing or malformed optional fields, derives cell ids
and the title, and encoding emits deterministic nbformat-style JSON.
"""

__all__ = [
    "Notebook",
    "CellEntry",
    "Cell",
    "MarkdownCell",
    "CodeCell",
    "source_of",
    "tags_of",
    "normalize_id",
    "infer",
    "decode",
    "DecodeError",
    "encode",
    "CodecOptions",
]

__version__ = "0.1.0"

from .model import Notebook, CellEntry, Cell, MarkdownCell, CodeCell, source_of, tags_of  # noqa: E402
from .ids import normalize_id  # noqa: E402
from .infer import infer  # noqa: E402
from .config import CodecOptions  # noqa: E402
from .decode import decode, DecodeError  # noqa: E402
from .encode import encode  # noqa: E402
