"""Lexical normalization helpers for sillogismi.

Everything here is pure string handling: no lexicon loading, no state.
Case handling uses ``str.upper``/``str.casefold``, which are defined by the
Unicode tables rather than by the process locale, so comparisons are the
same on every platform ("è" matches "È").
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple


TERMINAL_PUNCTUATION = ".?"
APOSTROPHES = ("'", "’")


def fold(text: str) -> str:
    """Return the caseless form of *text* used for comparisons."""
    return text.casefold()


def subject_key(text: str) -> str:
    """Normalize a phrase into a fact-store key (trimmed, upper-cased)."""
    return text.strip().upper()


def strip_terminal_punctuation(text: str) -> str:
    """Remove trailing sentence punctuation and surrounding whitespace.

    Marks are removed repeatedly so the result never ends in ``.`` or ``?``,
    which makes the function idempotent.

    Examples:
        >>> strip_terminal_punctuation("Il gatto è un animale.")
        'Il gatto è un animale'
        >>> strip_terminal_punctuation("  Chi è un animale ?  ")
        'Chi è un animale'
    """
    text = text.strip()
    while text and text[-1] in TERMINAL_PUNCTUATION:
        text = text[:-1].rstrip()
    return text


def starts_with(text: str, prefix: str) -> bool:
    """Case-insensitive ``str.startswith``.

    The comparison is made on the slice of *text* that has the prefix's
    length, so ``text[len(prefix):]`` is always the correct remainder.
    """
    if not prefix or len(text) < len(prefix):
        return False
    return fold(text[: len(prefix)]) == fold(prefix)


def match_prefix(text: str, prefixes: Iterable[str]) -> Optional[str]:
    """Return the first entry of *prefixes* that *text* starts with, if any."""
    for prefix in prefixes:
        if starts_with(text, prefix):
            return prefix
    return None


def _is_token_boundary(text: str, article: str) -> bool:
    if article.endswith(APOSTROPHES):
        return True
    rest = text[len(article):]
    return bool(rest) and rest[0].isspace()


def strip_leading_article(text: str, articles: Iterable[str]) -> str:
    """Remove the first matching leading article from *text*.

    *articles* are tried in order and only one is removed. An article
    matches as a whole token: it must end with an apostrophe (elided
    forms such as ``L'``) or be followed by whitespace. A phrase made of
    the article alone is left as it is.

    Examples:
        >>> strip_leading_article("L'Italia", ["L'", "L"])
        'Italia'
        >>> strip_leading_article("Isola", ["I"])
        'Isola'
    """
    for article in articles:
        if starts_with(text, article) and _is_token_boundary(text, article):
            rest = text[len(article):].strip()
            if rest:
                return rest
            break
    return text.strip()


def find_separator(text: str, tokens: Iterable[str], start: int = 1) -> Optional[Tuple[int, str]]:
    """Find the first token (in list order) occurring in *text* at or after *start*.

    Matching is case-insensitive. Returns ``(index, token)`` or None.
    """
    for token in tokens:
        if not token:
            continue
        m = re.compile(re.escape(token), re.IGNORECASE).search(text, start)
        if m:
            return m.start(), text[m.start():m.end()]
    return None


def join_lines(items: Iterable[str]) -> str:
    """Join response entries one per line."""
    return "\n".join(items)
