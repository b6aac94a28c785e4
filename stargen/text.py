"""Assemble narrative descriptions from ordered, optional fragments."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional

Fragment = Callable[[], Optional[str]]

_WHITESPACE = re.compile(r"\s+")


def compose(fragments: Iterable[Fragment]) -> str:
    """Call each fragment in order and join the non-empty results with spaces.

    Fragments may consume randomness, so they are always called in the
    order given, even when an earlier one produced nothing.
    """
    parts = []
    for fragment in fragments:
        text = fragment()
        if text:
            parts.append(text)
    return " ".join(parts)


def slugify(name: str) -> str:
    """Lowercase a name and replace each whitespace run with an underscore."""
    return _WHITESPACE.sub("_", name.lower())
