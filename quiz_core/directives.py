"""Directive lines (``;name: value``) applied on top of a base :class:`Config`."""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Tuple

from .errors import ConfigError, ConfigErrorKind
from .types import Config

__all__ = ["OPTIONS", "normalize_name", "parse_config"]


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f"invalid bool literal: {raw!r}")


def _parse_float(raw: str) -> float:
    # float() would also take digit separators
    if "_" in raw:
        raise ValueError(f"invalid float literal: {raw!r}")
    return float(raw)


# normalized name -> (Config field, converter, expected type label)
OPTIONS: Dict[str, Tuple[str, Callable[[str], object], str]] = {
    "value": ("value", _parse_float, "float"),
    "casesensitive": ("case_sensitive", _parse_bool, "bool"),
    "ordered": ("ordered", _parse_bool, "bool"),
    "orderedanswers": ("ordered_answers", _parse_bool, "bool"),
    "tutorial": ("tutorial", _parse_bool, "bool"),
}


def normalize_name(name: str) -> str:
    out = name.strip()
    for ch in ("-", "_", " "):
        out = out.replace(ch, "")
    return out.lower()


def parse_config(base: Config, text: str) -> Config:
    """Apply every directive in ``text`` to a copy of ``base``.

    Blank lines and ``#`` comments are skipped.  Any other line must start
    with ``;``.  Raises :class:`ConfigError` whose ``lines_parsed`` is the
    zero-based index of the offending line.
    """

    config = base
    for idx, raw_line in enumerate(text.split("\n")):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if not line.startswith(";"):
            raise ConfigError(ConfigErrorKind.MISSING_DELIMITER, line, idx)

        name, _, value = line[1:].partition(":")
        name = normalize_name(name)
        value = value.strip().lower()

        option = OPTIONS.get(name)
        if option is None:
            raise ConfigError(ConfigErrorKind.INVALID_OPTION, name, idx)
        field_name, convert, expected = option
        try:
            parsed = convert(value)
        except ValueError as exc:
            raise ConfigError(
                ConfigErrorKind.INVALID_VALUE, value, idx, expected=expected
            ) from exc
        config = replace(config, **{field_name: parsed})
    return config
