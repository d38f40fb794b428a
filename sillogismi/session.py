"""Session façade: one fact store, one storage location, one interpreter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .fact_store import FactStore, PathLike
from .interpreter import SentenceInterpreter
from .lexicon import default_lexicon
from .types import Lexicon

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "Sillogismi.js"


class KnowledgeSession:
    """Conversational access to a persisted fact store.

    The store at *path* is loaded at construction when the file exists,
    otherwise the session starts empty. A termination phrase saves the
    store before the farewell is returned.

    Example:
        >>> session = KnowledgeSession("facts.json")
        >>> session.process("Il gatto è un animale")
        'Ok.'
        >>> session.process("Cosa sai sul gatto?")
        'un animale'

    Raises:
        MalformedStoreError: if the file at *path* exists but does not
            contain a fact store.
    """

    def __init__(
        self,
        path: PathLike = DEFAULT_FILENAME,
        lexicon: Optional[Lexicon] = None,
        legacy_traversal: bool = False,
    ):
        self.path = Path(path)
        self.lexicon = lexicon or default_lexicon()
        self.legacy_traversal = legacy_traversal
        self.store = self._open(self.path)
        self.interpreter = SentenceInterpreter(
            self.store, lexicon=self.lexicon, on_goodbye=self.save
        )

    def _open(self, path: Path) -> FactStore:
        if not path.exists():
            logger.info(f"No fact store at {path}, starting empty")
            return FactStore(
                identity=self.lexicon.identity, legacy_traversal=self.legacy_traversal
            )
        store = FactStore.from_file(
            path, identity=self.lexicon.identity, legacy_traversal=self.legacy_traversal
        )
        logger.info(f"Loaded {len(store)} subjects from {path}")
        return store

    @property
    def goodbye(self) -> str:
        """The farewell returned by :meth:`process` when the session ends."""
        return self.interpreter.goodbye

    def process(self, sentence: str) -> str:
        """Answer one sentence; see :class:`SentenceInterpreter`."""
        return self.interpreter.process(sentence)

    def query(self, subject: str) -> List[str]:
        return self.store.query(subject)

    def inverse_query(self, attribute: str) -> List[str]:
        return self.store.inverse_query(attribute)

    def save(self, path: Optional[PathLike] = None) -> None:
        """Persist the store to *path* (default: the session's location)."""
        self.store.save(self.path if path is None else Path(path))

    def load(self, path: Optional[PathLike] = None) -> None:
        """Replace the in-memory store with the one persisted at *path*.

        Unlike construction, a missing file is an error here.
        """
        target = self.path if path is None else Path(path)
        store = FactStore.from_file(
            target, identity=self.lexicon.identity, legacy_traversal=self.legacy_traversal
        )
        logger.info(f"Loaded {len(store)} subjects from {target}")
        self.store = store
        self.interpreter.store = store
