"""Supermarket section classifier.

A single pure function over the ordered ``SECTION_TERMS`` table: the
first section with a term that matches the normalized ingredient wins,
anything else goes to ``DEFAULT_SECTION``.
"""

from __future__ import annotations

import re
from functools import lru_cache

from recipe_cart.services.shopping.constants import DEFAULT_SECTION, SECTION_TERMS
from recipe_cart.services.shopping.normalizer import normalize


def _term_pattern(term: str) -> str:
    """Regex for a term on word boundaries, tolerating simple plurals."""
    if term.endswith("y") and len(term) > 2:
        return re.escape(term[:-1]) + "(?:y|ies)"
    return re.escape(term) + "(?:s|es)?"


def _compile_section(terms: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first so multi-word terms win inside the alternation
    ordered = sorted(terms, key=len, reverse=True)
    alternation = "|".join(_term_pattern(term) for term in ordered)
    return re.compile(rf"\b(?:{alternation})\b")


_SECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (section, _compile_section(terms)) for section, terms in SECTION_TERMS
)

SECTION_NAMES: tuple[str, ...] = (
    *(section for section, _ in SECTION_TERMS),
    DEFAULT_SECTION,
)


@lru_cache(maxsize=4096)
def classify_key(key: str) -> str:
    """Classify an already-normalized ingredient key."""
    for section, pattern in _SECTION_PATTERNS:
        if pattern.search(key):
            return section
    return DEFAULT_SECTION


def classify(ingredient_text: str) -> str:
    """Map raw ingredient text to its supermarket section.

    Case-insensitive and indifferent to quantity prefixes, so
    "2 cups flour" and "Flour" land in the same section. Never fails.
    """
    return classify_key(normalize(ingredient_text))
