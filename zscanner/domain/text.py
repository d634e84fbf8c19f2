from __future__ import annotations

import re
import unicodedata
from functools import singledispatch

__all__ = [
    "as_text",
    "normalize_string",
]

_WHITESPACE_RE = re.compile(r"\s+")
# Combining Diacritical Marks block
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")


@singledispatch
def as_text(value: object) -> str:
    """Coerce an arbitrary value to the text the normalizer works on.

    Falls back to the default object repr when ``__str__`` itself fails.
    """
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


@as_text.register
def _(value: str) -> str:
    return value


@as_text.register(type(None))
def _(value: None) -> str:
    return ""


@as_text.register(bytes)
@as_text.register(bytearray)
def _(value: bytes | bytearray) -> str:
    return bytes(value).decode("utf-8", errors="replace")


def normalize_string(value: object) -> str:
    """Canonicalize free text for comparison.

    Rules:
    - ``None`` becomes the empty string; other values go through ``as_text``.
    - Lowercase.
    - Decompose (NFD) and drop combining diacritical marks (U+0300-U+036F).
    - Collapse whitespace runs to a single space and trim the ends.

    Idempotent: ``normalize_string(normalize_string(s)) == normalize_string(s)``.
    """
    if value is None:
        return ""

    s = as_text(value).lower()
    s = _COMBINING_MARKS_RE.sub("", unicodedata.normalize("NFD", s))
    return _WHITESPACE_RE.sub(" ", s).strip()
