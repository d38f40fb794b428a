"""sillogismi - a tiny natural-language front end over a transitive fact store.

Tell it facts in the shape "X è Y", ask what it knows about X, or ask who
is Y. Facts chain: if the cat is a feline and the feline is an animal,
the cat is an animal too.

Example:
    >>> from sillogismi import KnowledgeSession
    >>>
    >>> session = KnowledgeSession("facts.json")
    >>> session.process("Il gatto è un felino")     # 'Ok.'
    >>> session.process("Il felino è un animale")   # 'Ok.'
    >>> print(session.process("Cosa sai sul gatto?"))
    un felino
    un animale
    >>> session.process("Chi è un animale?")        # 'FELINO\\nGATTO'
"""

__version__ = "1.0.0"

from .errors import LexiconError, MalformedStoreError, SillogismiError
from .fact_store import FactStore
from .interpreter import Clause, Rule, SentenceInterpreter
from .lexicon import default_lexicon, lexicon_from_dict, load_lexicon
from .session import DEFAULT_FILENAME, KnowledgeSession
from .types import Fact, Lexicon, Responses
from .utils import strip_leading_article, strip_terminal_punctuation

__all__ = [
    "KnowledgeSession",
    "SentenceInterpreter",
    "FactStore",
    "Fact",
    "Lexicon",
    "Responses",
    "Clause",
    "Rule",
    "SillogismiError",
    "MalformedStoreError",
    "LexiconError",
    "DEFAULT_FILENAME",
    "default_lexicon",
    "load_lexicon",
    "lexicon_from_dict",
    "strip_leading_article",
    "strip_terminal_punctuation",
]
