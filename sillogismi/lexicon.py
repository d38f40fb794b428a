"""Lexicon loading.

The default Italian lexicon ships as JSON next to this module and is
loaded once, on first use. Other languages (or variants of the Italian
word lists) can be loaded from any JSON file of the same shape.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

from .errors import LexiconError
from .types import Lexicon, Responses


_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
DEFAULT_LEXICON_FILE = "lexicon_it.json"

_LIST_KEYS = (
    "articles",
    "predicates",
    "quit_commands",
    "query_commands",
    "inverse_query_commands",
)
_RESPONSE_KEYS = ("empty", "goodbye", "unknown", "not_understood", "dont_know", "ok")


def _load_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


# Lazy-loaded singleton
_default_lexicon: Optional[Lexicon] = None


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise LexiconError(f"lexicon field '{key}' must be a list of non-empty strings")
    return list(value)


def lexicon_from_dict(data: Dict[str, Any]) -> Lexicon:
    """Build a :class:`Lexicon` from its JSON representation.

    Raises:
        LexiconError: if a word list or a response is missing or mistyped.
    """
    if not isinstance(data, dict):
        raise LexiconError("lexicon must be a JSON object")

    lists = {key: _string_list(data, key) for key in _LIST_KEYS}

    raw_responses = data.get("responses")
    if not isinstance(raw_responses, dict):
        raise LexiconError("lexicon field 'responses' must be an object")
    missing = [k for k in _RESPONSE_KEYS if not isinstance(raw_responses.get(k), str)]
    if missing:
        raise LexiconError(f"lexicon responses missing: {', '.join(missing)}")
    responses = Responses(**{k: raw_responses[k] for k in _RESPONSE_KEYS})

    return Lexicon(
        language=str(data.get("language", "")),
        responses=responses,
        **lists,
    )


def load_lexicon(path: str) -> Lexicon:
    """Load a lexicon from a JSON file.

    ``OSError`` propagates; invalid JSON or a document with the wrong
    shape raises :class:`LexiconError`.
    """
    try:
        data = _load_json(path)
    except json.JSONDecodeError as e:
        raise LexiconError(f"lexicon file {path} is not valid JSON: {e}") from e
    return lexicon_from_dict(data)


def default_lexicon() -> Lexicon:
    """Return the shared Italian lexicon."""
    global _default_lexicon
    if _default_lexicon is None:
        _default_lexicon = load_lexicon(os.path.join(_DATA_DIR, DEFAULT_LEXICON_FILE))
    return _default_lexicon
