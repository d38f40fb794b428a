"""In-memory fact store with transitive queries and JSON persistence.

The store is a directed graph: every subject key points to an ordered,
duplicate-free list of attributes, and an attribute may itself be a
subject. Nodes are compared through an *identity* function (by default
the trimmed, upper-cased phrase); subjects are stored under their
identity while attributes keep the text the user wrote.

Traversal modes:
    guarded (default)
        Explicit stack walk with a visited set keyed by identity. Every
        reachable node is reported once, cycles terminate.
    legacy
        Plain recursion without de-duplication. Kept for compatibility
        with stores built by older versions; never terminates normally on
        cyclic data (Python raises ``RecursionError``).
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from .errors import MalformedStoreError
from .types import Fact
from .utils import subject_key

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class FactStore:
    """Subject → attributes mapping with forward and inverse transitive lookup.

    Example:
        >>> store = FactStore()
        >>> store.store("A", "B")
        True
        >>> store.store("b", "C")
        True
        >>> store.query("a")
        ['B', 'C']
        >>> store.inverse_query("c")
        ['B', 'A']
    """

    def __init__(
        self,
        identity: Optional[Callable[[str], str]] = None,
        legacy_traversal: bool = False,
    ):
        self._identity = identity or subject_key
        self.legacy_traversal = legacy_traversal
        self._facts: Dict[str, List[str]] = {}
        if legacy_traversal:
            logger.warning(
                "Legacy traversal enabled: queries over cyclic facts will not terminate"
            )

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, subject: str) -> bool:
        return self._identity(subject) in self._facts

    def key(self, phrase: str) -> str:
        """Return the identity under which *phrase* is stored."""
        return self._identity(phrase)

    def subjects(self) -> List[str]:
        """All subject keys in insertion order."""
        return list(self._facts)

    def attributes(self, subject: str) -> List[str]:
        """Direct attributes of *subject* (no traversal)."""
        return list(self._facts.get(self._identity(subject), []))

    def facts(self) -> Iterator[Fact]:
        """Iterate over every stored edge in insertion order."""
        for subject, attributes in self._facts.items():
            for attribute in attributes:
                yield Fact(subject=subject, attribute=attribute)

    def to_dict(self) -> Dict[str, List[str]]:
        """Return a copy of the whole mapping."""
        return {subject: list(attributes) for subject, attributes in self._facts.items()}

    # ── Mutation ─────────────────────────────────────────────────────────────

    def store(self, subject: str, attribute: str) -> bool:
        """Record that *subject* has *attribute*.

        Returns:
            True if the edge was added, False if an attribute with the same
            identity was already stored under the subject.
        """
        key = self._identity(subject)
        attributes = self._facts.get(key)
        if attributes is None:
            self._facts[key] = [attribute]
            logger.debug(f"New subject {key!r} -> {attribute!r}")
            return True

        wanted = self._identity(attribute)
        if any(self._identity(existing) == wanted for existing in attributes):
            logger.debug(f"Skipping duplicate {key!r} -> {attribute!r}")
            return False

        attributes.append(attribute)
        logger.debug(f"Appended {key!r} -> {attribute!r}")
        return True

    # ── Queries ──────────────────────────────────────────────────────────────

    def query(self, subject: str) -> List[str]:
        """Everything reachable from *subject* following subject → attribute edges.

        Direct attributes come first, then the expansion of each of them,
        depth-first in insertion order. Returns an empty list for an
        unknown subject.
        """
        if self.legacy_traversal:
            return self._legacy_query(subject)

        found: List[str] = []
        reported = set()
        expanded = set()
        stack = [self._identity(subject)]
        while stack:
            key = stack.pop()
            if key in expanded:
                continue
            expanded.add(key)
            attributes = self._facts.get(key, [])
            for attribute in attributes:
                ident = self._identity(attribute)
                if ident not in reported:
                    reported.add(ident)
                    found.append(attribute)
            stack.extend(self._identity(a) for a in reversed(attributes))
        return found

    def inverse_query(self, attribute: str) -> List[str]:
        """Every subject key from which *attribute* is reachable.

        Subjects are reported depth-first: each direct match is followed
        by the subjects that reach it, before the next direct match.
        """
        if self.legacy_traversal:
            return self._legacy_inverse_query(attribute)

        reverse = self._reverse_edges()
        found: List[str] = []
        reported = set()
        stack = list(reversed(reverse.get(self._identity(attribute), [])))
        while stack:
            key = stack.pop()
            if key in reported:
                continue
            reported.add(key)
            found.append(key)
            stack.extend(reversed(reverse.get(key, [])))
        return found

    def _reverse_edges(self) -> Dict[str, List[str]]:
        """Map each attribute identity to the subjects holding it, in store order."""
        reverse: Dict[str, List[str]] = {}
        for key, attributes in self._facts.items():
            for attribute in attributes:
                subjects = reverse.setdefault(self._identity(attribute), [])
                if key not in subjects:
                    subjects.append(key)
        return reverse

    def _legacy_query(self, subject: str) -> List[str]:
        found: List[str] = []
        attributes = self._facts.get(self._identity(subject))
        if attributes:
            found.extend(attributes)
            for attribute in attributes:
                found.extend(self._legacy_query(attribute))
        return found

    def _legacy_inverse_query(self, attribute: str) -> List[str]:
        found: List[str] = []
        wanted = self._identity(attribute)
        for key, attributes in self._facts.items():
            if any(self._identity(a) == wanted for a in attributes):
                found.append(key)
                found.extend(self._legacy_inverse_query(key))
        return found

    # ── Persistence ──────────────────────────────────────────────────────────

    def serialize(self) -> bytes:
        """Encode the whole store as UTF-8 JSON, subjects in insertion order."""
        return json.dumps(self._facts, ensure_ascii=False, indent=2).encode("utf-8")

    @classmethod
    def deserialize(
        cls,
        data: Union[bytes, str],
        identity: Optional[Callable[[str], str]] = None,
        legacy_traversal: bool = False,
    ) -> "FactStore":
        """Rebuild a store from :meth:`serialize` output.

        Keys and attribute lists are restored exactly as encoded.

        Raises:
            MalformedStoreError: if *data* is not a JSON object mapping
                strings to lists of strings.
        """
        try:
            text = data.decode("utf-8-sig") if isinstance(data, bytes) else data
            raw = json.loads(text)
        except UnicodeDecodeError as e:
            raise MalformedStoreError(f"fact store is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise MalformedStoreError(f"fact store is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise MalformedStoreError(
                f"fact store must be a JSON object, got {type(raw).__name__}"
            )

        facts: Dict[str, List[str]] = {}
        for subject, attributes in raw.items():
            if not isinstance(attributes, list) or not all(
                isinstance(a, str) for a in attributes
            ):
                raise MalformedStoreError(
                    f"attributes of {subject!r} must be a list of strings"
                )
            facts[subject] = list(attributes)

        store = cls(identity=identity, legacy_traversal=legacy_traversal)
        store._facts = facts
        return store

    def save(self, path: PathLike) -> None:
        """Write the store to *path*, replacing any previous file atomically."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(self.serialize())
            os.replace(tmp, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            raise
        logger.info(f"Saved {len(self._facts)} subjects to {target}")

    @classmethod
    def from_file(
        cls,
        path: PathLike,
        identity: Optional[Callable[[str], str]] = None,
        legacy_traversal: bool = False,
    ) -> "FactStore":
        """Load a store written by :meth:`save`.

        ``OSError`` (including a missing file) propagates unchanged.
        """
        data = Path(path).read_bytes()
        return cls.deserialize(data, identity=identity, legacy_traversal=legacy_traversal)
