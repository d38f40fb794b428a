"""Type definitions for the sillogismi library."""

from dataclasses import dataclass, field
from typing import List

from .utils import strip_leading_article, subject_key


@dataclass(frozen=True)
class Fact:
    """A single subject → attribute edge of the fact store.

    Attributes:
        subject: Upper-cased subject key
        attribute: Attribute as written by the user
    """
    subject: str
    attribute: str


@dataclass
class Responses:
    """Canned answers returned by the interpreter.

    Attributes:
        empty: Reply to an empty or blank sentence
        goodbye: Farewell; the I/O loop stops when it receives exactly this
        unknown: Forward query found nothing
        not_understood: Sentence matched no rule
        dont_know: Inverse query found nothing
        ok: Acknowledgment after storing a fact
    """
    empty: str = "Hai scritto qualcosa?"
    goodbye: str = "Ciao."
    unknown: str = "Non so nulla."
    not_understood: str = "Non ho capito."
    dont_know: str = "Non lo so."
    ok: str = "Ok."


@dataclass
class Lexicon:
    """Word lists for one natural language.

    Every list is ordered: earlier entries win, so longer or more specific
    forms must come before the shorter forms they contain.

    Attributes:
        language: Language tag (e.g. "it")
        articles: Leading determiners stripped from subjects and objects
        predicates: Copular tokens separating subject and object
        quit_commands: Prefixes that end the session
        query_commands: Prefixes that ask for everything known about a subject
        inverse_query_commands: Interrogative subjects ("who", "what")
        responses: Canned answers
    """
    language: str
    articles: List[str]
    predicates: List[str]
    quit_commands: List[str]
    query_commands: List[str]
    inverse_query_commands: List[str]
    responses: Responses = field(default_factory=Responses)

    def strip_article(self, text: str) -> str:
        return strip_leading_article(text, self.articles)

    def identity(self, text: str) -> str:
        """Node identity of a phrase: article removed, upper-cased."""
        return subject_key(self.strip_article(text))
