from __future__ import annotations
import argparse, json, logging, os
from typing import List, Optional

from . import config as CFG
from .engine import Engine, load_keywords
from .matcher import match_kinds
from .models import Keyword, KeywordCategory, MatchResult


def _parse_keyword_arg(raw: str) -> Keyword:
    """NAME or NAME:Category"""
    name, sep, cat = raw.rpartition(":")
    if not sep or not name:
        return Keyword(name=raw)
    return Keyword(name=name, category=KeywordCategory.parse(cat))


def _print_result(eng: Engine, text: str, cursor: int, result: Optional[MatchResult], explain: bool) -> None:
    frag = eng.locate(text, cursor)
    if frag is None:
        print("(no word at cursor)")
    elif result is None:
        print(f"word: {frag.text!r} [{frag.start},{frag.end})  (no matches)")
    else:
        print(f"word: {frag.text!r} [{frag.start},{frag.end})  ghost: {result.ghost_suffix!r}")
        print("#  Category   Keyword")
        for i, k in enumerate(result.matches, 1):
            line = f"{i:<2} {k.category.value:<10} {k.name}"
            if explain:
                line += "  (" + ", ".join(match_kinds(frag.text, k.name).labels()) + ")"
            print(line)

    spans = eng.highlight(text, cursor=cursor)
    if spans:
        print("highlights: " + " ".join(f"[{s.start},{s.end})={text[s.start:s.end]!r}" for s in spans))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Keyword mention / autocomplete CLI")
    p.add_argument("--keyword", action="append", default=[], metavar="NAME[:Category]",
                   help="Keyword to match (repeatable)")
    p.add_argument("--keywords", default=None, help="JSON file with a list of keywords")
    p.add_argument("--text", default=None, help="Buffer to analyse once")
    p.add_argument("--cursor", type=int, default=None, help="Cursor offset (default: end of text)")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--explain", action="store_true", help="Show which rules matched")
    p.add_argument("--repl", action="store_true", help="Interactive loop (cursor at end of line)")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose or CFG.VERBOSE:
        logging.basicConfig(level=logging.INFO)
        os.environ["MENTION_ENGINE_VERBOSE"] = "1"

    keywords: List[Keyword] = []
    if args.keywords:
        try:
            keywords.extend(load_keywords(args.keywords))
        except (OSError, ValueError) as exc:
            p.error(f"--keywords: {exc}")
    keywords.extend(_parse_keyword_arg(k) for k in args.keyword)
    if not keywords:
        p.error("at least one --keyword or --keywords file is required")
    if args.text is None and not args.repl:
        p.error("--text or --repl is required")

    eng = Engine(keywords)

    def run(text: str, cursor: Optional[int]) -> None:
        pos = len(text) if cursor is None else cursor
        result = eng.complete(text, pos)
        if args.json:
            frag = eng.locate(text, pos)
            payload = {
                "fragment": frag.to_dict() if frag else None,
                "result": result.to_dict() if result else None,
                "highlights": [s.to_dict() for s in eng.highlight(text, cursor=pos)],
            }
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        else:
            _print_result(eng, text, pos, result, args.explain)

    if args.text is not None:
        run(args.text, args.cursor)

    if args.repl:
        print("Type text (empty line to exit).")
        while True:
            try:
                line = input("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not line:
                break
            run(line, None)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
