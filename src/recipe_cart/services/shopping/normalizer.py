"""Ingredient text normalization for duplicate detection.

``normalize`` maps free-text ingredient lines such as "2 cups flour" and
"Flour" to the same canonical key ("flour"). It is a heuristic: it only
strips a closed set of leading quantity and unit tokens and never tries
to parse the line. The one hard guarantee is determinism.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from recipe_cart.services.shopping.constants import (
    ARTICLE_TOKENS,
    CONNECTOR_TOKENS,
    UNICODE_FRACTIONS,
    UNIT_TOKENS,
)


if TYPE_CHECKING:
    from collections.abc import Iterable


_PARENTHETICAL_RE: Final = re.compile(r"\([^)]*\)")
_WHITESPACE_RE: Final = re.compile(r"\s+")

# 2, 1.5, 1/2, ½, 1½, 1-2, 1–2, ½-1
_NUMBER: Final = rf"(?:\d+(?:[./]\d+)?[{UNICODE_FRACTIONS}]?|[{UNICODE_FRACTIONS}])"
_QUANTITY_TOKEN_RE: Final = re.compile(rf"^{_NUMBER}(?:[-–]{_NUMBER})?$")

_EDGE_PUNCTUATION: Final = ".,;:!?-–*"

_STRIPPABLE_WORDS: Final = UNIT_TOKENS | ARTICLE_TOKENS | CONNECTOR_TOKENS


def clean(raw: str) -> str:
    """Lowercase, drop parenthetical notes and collapse whitespace."""
    text = _PARENTHETICAL_RE.sub(" ", raw.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def _is_strippable(token: str) -> bool:
    token = token.rstrip(_EDGE_PUNCTUATION) or token
    return bool(_QUANTITY_TOKEN_RE.match(token)) or token in _STRIPPABLE_WORDS


def normalize(raw: str) -> str:
    """Return the canonical key used to detect duplicate ingredients.

    Leading quantities ("2", "1/2", "½", "1-2"), articles ("a", "an"),
    unit words ("cups", "tbsp", "large") and a connecting "of" are
    stripped, then trailing punctuation is trimmed. When stripping would
    leave nothing ("2 cups"), the cleaned full text is the key instead.
    A line that is only a parenthetical ("(optional)") keys on its
    lowercased text so it stays distinct.

    Examples:
        >>> normalize("2 cups Flour")
        'flour'
        >>> normalize("1 (14 oz) can of tomatoes")
        'tomatoes'
    """
    cleaned = clean(raw)
    if not cleaned:
        return _WHITESPACE_RE.sub(" ", raw.lower()).strip()

    tokens = cleaned.split(" ")
    start = 0
    while start < len(tokens) and _is_strippable(tokens[start]):
        start += 1

    core = " ".join(tokens[start:]).strip(_EDGE_PUNCTUATION + " ")
    if core:
        return core
    return cleaned.strip(_EDGE_PUNCTUATION + " ") or cleaned


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop ingredients whose key was already seen, keeping first-seen text.

    Blank entries are skipped. Order of first appearance is preserved.
    """
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        key = normalize(item)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(item.strip())
    return result
