"""Sentence interpreter.

A sentence is classified by an ordered list of rules; the first rule whose
matcher accepts the sentence produces the answer. Rules, in priority order:

    1. goodbye     "Ciao", "Grazie", ...   persist and say goodbye
    2. query       "Cosa sai su X"         forward query on X
    3. inverse     "Chi è Y"               inverse query on Y
    4. statement   "X è Y"                 store X → Y

Anything else gets the "not understood" answer. Empty input is answered
before any rule runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .fact_store import FactStore
from .lexicon import default_lexicon
from .types import Lexicon
from .utils import find_separator, join_lines, match_prefix, strip_terminal_punctuation

logger = logging.getLogger(__name__)


@dataclass
class Clause:
    """What a matcher extracted from a sentence.

    Attributes:
        subject: Subject phrase as written (the store's identity strips
            its article)
        obj: Object phrase as written (empty for single-phrase commands)
    """
    subject: str
    obj: str = ""


@dataclass
class Rule:
    """A (matcher, handler) pair."""
    name: str
    match: Callable[[str], Optional[Clause]]
    handle: Callable[[Clause], str]


class SentenceInterpreter:
    """Route free-text sentences to a :class:`FactStore`.

    Args:
        store: The fact store queried and updated by sentences
        lexicon: Word lists and canned responses (default: Italian)
        on_goodbye: Called before the farewell is returned, typically to
            persist the store
    """

    def __init__(
        self,
        store: FactStore,
        lexicon: Optional[Lexicon] = None,
        on_goodbye: Optional[Callable[[], None]] = None,
    ):
        self.store = store
        self.lexicon = lexicon or default_lexicon()
        self.on_goodbye = on_goodbye
        self.rules: List[Rule] = [
            Rule("goodbye", self._match_goodbye, self._handle_goodbye),
            Rule("query", self._match_query, self._handle_query),
            Rule("inverse", self._match_inverse, self._handle_inverse),
            Rule("statement", self._match_statement, self._handle_statement),
        ]

    @property
    def goodbye(self) -> str:
        """The farewell; the I/O loop ends the session when it gets exactly this."""
        return self.lexicon.responses.goodbye

    def process(self, sentence: str) -> str:
        """Answer one sentence."""
        if not sentence or not sentence.strip():
            return self.lexicon.responses.empty

        classified = self.classify(sentence)
        if classified is None:
            logger.debug(f"No rule matched {sentence!r}")
            return self.lexicon.responses.not_understood

        rule, clause = classified
        logger.debug(f"Rule {rule.name!r} matched {sentence!r}: {clause}")
        return rule.handle(clause)

    def classify(self, sentence: str) -> Optional[Tuple[Rule, Clause]]:
        """Return the first rule accepting *sentence* and what it extracted."""
        text = strip_terminal_punctuation(sentence)
        for rule in self.rules:
            clause = rule.match(text)
            if clause is not None:
                return rule, clause
        return None

    def split_copula(self, text: str) -> Optional[Clause]:
        """Split "X <predicate> Y" into subject and object.

        Predicates are tried in lexicon order; the first one found after
        position 0 separates the sentence. Returns None when no predicate
        is found or either side is blank.
        """
        found = find_separator(text, self.lexicon.predicates, start=1)
        if found is None:
            return None
        index, token = found
        subject = text[:index].strip()
        obj = text[index + len(token):].strip()
        if not subject or not obj:
            return None
        return Clause(subject=subject, obj=obj)

    # ── Matchers ─────────────────────────────────────────────────────────────

    def _match_goodbye(self, text: str) -> Optional[Clause]:
        command = match_prefix(text, self.lexicon.quit_commands)
        return Clause(subject=command) if command else None

    def _match_query(self, text: str) -> Optional[Clause]:
        command = match_prefix(text, self.lexicon.query_commands)
        if command is None:
            return None
        return Clause(subject=text[len(command):].strip())

    def _match_inverse(self, text: str) -> Optional[Clause]:
        clause = self.split_copula(text)
        if clause and match_prefix(
            self.lexicon.strip_article(clause.subject), self.lexicon.inverse_query_commands
        ):
            return clause
        return None

    def _match_statement(self, text: str) -> Optional[Clause]:
        return self.split_copula(text)

    # ── Handlers ─────────────────────────────────────────────────────────────

    def _handle_goodbye(self, clause: Clause) -> str:
        if self.on_goodbye is not None:
            self.on_goodbye()
        return self.goodbye

    def _handle_query(self, clause: Clause) -> str:
        found = self.store.query(clause.subject)
        return join_lines(found) if found else self.lexicon.responses.unknown

    def _handle_inverse(self, clause: Clause) -> str:
        found = self.store.inverse_query(clause.obj)
        return join_lines(found) if found else self.lexicon.responses.dont_know

    def _handle_statement(self, clause: Clause) -> str:
        self.store.store(clause.subject, clause.obj)
        return self.lexicon.responses.ok
