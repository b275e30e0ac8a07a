"""Name keys used as the last-resort identity tier."""

from __future__ import annotations

import re
from typing import Any


_NON_KEY_CHARS = re.compile(r"[^a-z0-9]+")
_NAME_SUFFIX_TOKENS = {"jr", "sr", "ii", "iii", "iv", "v"}


def normalize_name(name: Any) -> str:
    """Collapse a display name into a ``[a-z0-9]`` lookup key.

    ``"Odell Beckham Jr."`` and ``"odell beckham"`` both become
    ``"odellbeckham"``. Accented letters are stripped, not folded, so
    ``"José"`` keys as ``"jos"``. Missing input yields ``""``, which is never a
    usable key.

    >>> normalize_name("A.J. Brown")
    'ajbrown'
    >>> normalize_name(None)
    ''
    """

    if name is None:
        return ""
    text = name if isinstance(name, str) else str(name)
    tokens = [tok for tok in _NON_KEY_CHARS.split(text.lower()) if tok]
    # A lone suffix-looking token is kept so the key never collapses to "".
    while len(tokens) > 1 and tokens[-1] in _NAME_SUFFIX_TOKENS:
        tokens.pop()
    return "".join(tokens)
