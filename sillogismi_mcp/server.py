"""sillogismi MCP Server: exposes the fact store via Model Context Protocol.

Usage:
    sillogismi-mcp --db .sillogismi/facts.json
    sillogismi-mcp --db .sillogismi/facts.json --lexicon my_lexicon.json

    # Or via Python:
    python -m sillogismi_mcp.server --db .sillogismi/facts.json
"""

import argparse
import json
import logging
from typing import Optional

from mcp.server import FastMCP

from sillogismi import KnowledgeSession, load_lexicon
from sillogismi.session import DEFAULT_FILENAME

logger = logging.getLogger("sillogismi-mcp")

# Global state
_session: Optional[KnowledgeSession] = None

# Create the FastMCP server
mcp = FastMCP(
    "sillogismi",
    instructions=(
        "sillogismi keeps a small graph of Italian 'X è Y' facts. "
        "Use sillogismi_process to pass user sentences verbatim: statements "
        "('Il gatto è un felino') are stored, questions ('Cosa sai sul gatto?', "
        "'Chi è un animale?') are answered transitively. "
        "Use sillogismi_query and sillogismi_inverse_query for structured lookups, "
        "and sillogismi_save to checkpoint the store."
    ),
)


def _get_session() -> KnowledgeSession:
    global _session
    if _session is None:
        _session = KnowledgeSession(DEFAULT_FILENAME)
    return _session


@mcp.tool()
def sillogismi_process(sentence: str) -> str:
    """Process one natural-language sentence and return the answer.

    Statements are stored, questions are answered from the store. A
    termination phrase ('Ciao', 'Grazie', ...) saves the store; the server
    keeps running and reports ``ended: true``.

    Args:
        sentence: The sentence, exactly as the user wrote it.
    """
    session = _get_session()
    answer = session.process(sentence)
    result = {
        "sentence": sentence,
        "answer": answer,
        "ended": answer == session.goodbye,
        "subjects": len(session.store),
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


@mcp.tool()
def sillogismi_query(subject: str) -> str:
    """Everything reachable from a subject (forward, transitive).

    Args:
        subject: The subject to look up (a leading article is ignored).
    """
    session = _get_session()
    found = session.query(subject)
    result = {
        "subject": subject,
        "key": session.store.key(subject),
        "found": len(found),
        "results": found,
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


@mcp.tool()
def sillogismi_inverse_query(attribute: str) -> str:
    """Every subject from which an attribute is reachable (inverse, transitive).

    Args:
        attribute: The attribute to look up.
    """
    session = _get_session()
    found = session.inverse_query(attribute)
    result = {
        "attribute": attribute,
        "found": len(found),
        "results": found,
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


@mcp.tool()
def sillogismi_save() -> str:
    """Persist the fact store to the server's storage location."""
    session = _get_session()
    session.save()
    result = {
        "saved": True,
        "path": str(session.path),
        "subjects": len(session.store),
    }
    return json.dumps(result, indent=2, ensure_ascii=False)


def main():
    """Entry point for the sillogismi-mcp command."""
    parser = argparse.ArgumentParser(description="sillogismi MCP Server")
    parser.add_argument(
        "--db",
        default=DEFAULT_FILENAME,
        help=f"Path to the fact store file (default: {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--lexicon",
        default=None,
        help="Path to a JSON lexicon (default: bundled Italian lexicon)",
    )
    parser.add_argument(
        "--legacy-traversal",
        action="store_true",
        help="Use the old unbounded recursive queries (loops on cyclic facts)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    # Initialize global session
    global _session
    lexicon = load_lexicon(args.lexicon) if args.lexicon else None
    _session = KnowledgeSession(
        args.db, lexicon=lexicon, legacy_traversal=args.legacy_traversal
    )
    logger.info(
        f"sillogismi MCP server started with db={args.db}, subjects={len(_session.store)}"
    )

    # Run via stdio (standard for MCP)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
