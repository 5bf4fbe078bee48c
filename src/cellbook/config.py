from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger("cellbook.config")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CodecOptions:
    """Decode-time options.

    default_kernel: kernel name used when the document does not carry one.
    preserve_title: keep an explicit non-empty title instead of clearing it
        during inference.
    """

    default_kernel: str = "python3"
    preserve_title: bool = False


_FIELD_TYPES = {"default_kernel": str, "preserve_title": bool}


def options_from_mapping(data: Mapping[str, Any]) -> CodecOptions:
    known = {f.name for f in fields(CodecOptions)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        expected = _FIELD_TYPES[key]
        if not isinstance(value, expected):
            raise ConfigError(
                f"Config key {key!r} must be {expected.__name__}, got {type(value).__name__}"
            )
        kwargs[key] = value
    return CodecOptions(**kwargs)


def load_options(path: str | Path) -> CodecOptions:
    """Read CodecOptions from a YAML mapping; an empty file yields defaults."""
    text = Path(path).read_text(encoding="utf-8")
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(text)
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return CodecOptions()
    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping")
    return options_from_mapping(data)
