from __future__ import annotations

import re

MAX_ID_LENGTH = 64
EMPTY_ID = "_"

_DISALLOWED_RUN = re.compile(r"[^A-Za-z0-9_-]+")
_SEPARATORS = "-_"


def normalize_id(text: str) -> str:
    """Turn arbitrary text into a cell id matching ``^[a-z0-9_-]{1,64}$``.

    Runs of characters outside ``[A-Za-z0-9_-]`` collapse to a single hyphen,
    separator runs are trimmed from both ends, the result is cut to 64
    characters and lowercased. An empty result becomes ``"_"``.

    Example: '_-Abc-123-_' -> 'abc-123'
    """
    out = _DISALLOWED_RUN.sub("-", text)
    out = out.strip(_SEPARATORS)
    # a cut inside a separator run leaves a trailing separator that a second
    # pass would strip; dropping it here keeps normalize_id idempotent
    out = out[:MAX_ID_LENGTH].rstrip(_SEPARATORS)
    out = out.lower()
    return out or EMPTY_ID
