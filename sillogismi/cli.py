"""sillogismi CLI: talk to a fact store from the command line.

Usage:
    sillogismi chat --db Sillogismi.js
    sillogismi tell "Il gatto è un felino" "Il felino è un animale"
    sillogismi query gatto
    sillogismi who animale --json
    sillogismi dump
    sillogismi version
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .errors import SillogismiError
from .lexicon import load_lexicon
from .session import DEFAULT_FILENAME, KnowledgeSession


PROMPT = "> "


def _open_session(args: argparse.Namespace) -> KnowledgeSession:
    lexicon = load_lexicon(args.lexicon) if args.lexicon else None
    return KnowledgeSession(args.db, lexicon=lexicon, legacy_traversal=args.legacy_traversal)


def _print_results(items: List[str], as_json: bool, key: str, value: str) -> None:
    if as_json:
        print(json.dumps({key: value, "results": items}, indent=2, ensure_ascii=False))
    else:
        for item in items:
            print(item)


def cmd_chat(args: argparse.Namespace) -> int:
    """Interactive loop: one sentence per line until the farewell or EOF."""
    session = _open_session(args)
    while True:
        try:
            sentence = input(PROMPT)
        except EOFError:
            session.save()
            print()
            return 0
        answer = session.process(sentence)
        print(answer)
        if answer == session.goodbye:
            return 0


def cmd_tell(args: argparse.Namespace) -> int:
    """Process sentences in order, print each answer, then save."""
    session = _open_session(args)
    for sentence in args.sentences:
        answer = session.process(sentence)
        print(answer)
        if answer == session.goodbye:
            return 0
    session.save()
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Print everything known about a subject."""
    session = _open_session(args)
    found = session.query(args.subject)
    if not found and not args.json:
        print(session.lexicon.responses.unknown, file=sys.stderr)
    _print_results(found, args.json, "subject", args.subject)
    return 0 if found else 1


def cmd_who(args: argparse.Namespace) -> int:
    """Print every subject that leads to an attribute."""
    session = _open_session(args)
    found = session.inverse_query(args.attribute)
    if not found and not args.json:
        print(session.lexicon.responses.dont_know, file=sys.stderr)
    _print_results(found, args.json, "attribute", args.attribute)
    return 0 if found else 1


def cmd_dump(args: argparse.Namespace) -> int:
    """Print the whole store."""
    session = _open_session(args)
    if args.edges:
        for fact in session.store.facts():
            print(f"{fact.subject} -> {fact.attribute}")
    else:
        print(session.store.serialize().decode("utf-8"))
    return 0


def cmd_version(_args: argparse.Namespace) -> int:
    """Print the version."""
    print(f"sillogismi {__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--db", "-d",
        default=DEFAULT_FILENAME,
        help=f"Path to the fact store file (default: {DEFAULT_FILENAME})",
    )
    common.add_argument(
        "--lexicon",
        default=None,
        help="Path to a JSON lexicon (default: bundled Italian lexicon)",
    )
    common.add_argument(
        "--legacy-traversal",
        action="store_true",
        default=False,
        help="Use the old unbounded recursive queries (fail on cyclic facts)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser = argparse.ArgumentParser(
        prog="sillogismi",
        description="sillogismi: a tiny natural-language front end over a fact store",
    )
    sub = parser.add_subparsers(dest="command")

    # sillogismi chat
    p_chat = sub.add_parser("chat", parents=[common], help="Interactive session")
    p_chat.set_defaults(func=cmd_chat)

    # sillogismi tell
    p_tell = sub.add_parser("tell", parents=[common], help="Process sentences and save")
    p_tell.add_argument("sentences", nargs="+", help="Sentences to process, in order")
    p_tell.set_defaults(func=cmd_tell)

    # sillogismi query
    p_query = sub.add_parser("query", parents=[common], help="Everything known about a subject")
    p_query.add_argument("subject", help="The subject to look up")
    p_query.add_argument("--json", action="store_true", help="Print JSON")
    p_query.set_defaults(func=cmd_query)

    # sillogismi who
    p_who = sub.add_parser("who", parents=[common], help="Every subject leading to an attribute")
    p_who.add_argument("attribute", help="The attribute to look up")
    p_who.add_argument("--json", action="store_true", help="Print JSON")
    p_who.set_defaults(func=cmd_who)

    # sillogismi dump
    p_dump = sub.add_parser("dump", parents=[common], help="Print the whole store")
    p_dump.add_argument("--edges", action="store_true", help="One 'SUBJECT -> attribute' per line")
    p_dump.set_defaults(func=cmd_dump)

    # sillogismi version
    p_version = sub.add_parser("version", help="Show version")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(0)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        code = args.func(args)
    except (SillogismiError, OSError, RecursionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
