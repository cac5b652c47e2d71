from __future__ import annotations
import argparse
import logging
import os
from typing import Any, Optional

from flask import Flask, request, jsonify

from mention_engine import config as CFG
from mention_engine import Engine, HighlightSpan, SpanKind, load_keywords, parse_keywords, render_segments

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine


# ---------- request parsing ----------

def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object body")
    return data


def _text(data: dict) -> str:
    text = data.get("text", "")
    if not isinstance(text, str):
        raise ValueError("'text' must be a string")
    return text


def _cursor(data: dict, text: str, *, required: bool = False) -> Optional[int]:
    if "cursor" not in data or data["cursor"] is None:
        return len(text) if required else None
    cur = data["cursor"]
    # bool is an int subclass; reject it explicitly
    if isinstance(cur, bool) or not isinstance(cur, int):
        raise ValueError("'cursor' must be an integer")
    return cur


def _keywords(data: dict) -> Optional[list]:
    if "keywords" not in data:
        return None
    items = data["keywords"]
    if not isinstance(items, list):
        raise ValueError("'keywords' must be a list")
    return parse_keywords(items)


def _feedback(data: dict) -> Optional[HighlightSpan]:
    fb: Any = data.get("feedback")
    if fb is None:
        return None
    if not isinstance(fb, dict) or not all(
        isinstance(fb.get(k), int) and not isinstance(fb.get(k), bool) for k in ("start", "end")
    ):
        raise ValueError("'feedback' must be an object with integer 'start' and 'end'")
    return HighlightSpan(fb["start"], fb["end"], SpanKind.TRANSIENT_FEEDBACK)


@app.errorhandler(ValueError)
def _bad_request(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


# ---------- API ----------

@app.get("/health")
def health():
    return jsonify({"ok": True, "keywords": len(_get_engine().keywords)})


@app.post("/api/fragment")
def api_fragment():
    data = _payload()
    text = _text(data)
    frag = _get_engine().locate(text, _cursor(data, text, required=True))
    return jsonify(frag.to_dict() if frag else None)


@app.post("/api/complete")
def api_complete():
    data = _payload()
    text = _text(data)
    result = _get_engine().complete(text, _cursor(data, text, required=True), _keywords(data))
    return jsonify(result.to_dict() if result else None)


@app.post("/api/highlight")
def api_highlight():
    data = _payload()
    text = _text(data)
    cursor = _cursor(data, text)
    kws = _keywords(data)
    eng = _get_engine()
    spans = eng.highlight(text, cursor=cursor, feedback=_feedback(data), keywords=kws)
    result = eng.complete(text, cursor, kws) if cursor is not None else None
    segments = render_segments(
        text, spans, result, dropdown_open=bool(result and len(result.matches) > 1)
    )
    return jsonify({
        "spans": [s.to_dict() for s in spans],
        "segments": [{"text": s.text, "kind": s.kind} for s in segments],
    })


@app.post("/api/accept")
def api_accept():
    data = _payload()
    text = _text(data)
    cursor = _cursor(data, text, required=True)
    eng = _get_engine()
    result = eng.complete(text, cursor, _keywords(data))
    if result is None:
        return jsonify({"accepted": False, "text": text, "cursor": cursor})

    name = data.get("name")
    keyword = None
    if name is not None:
        keyword = next((k for k in result.matches if k.name == name), None)
        if keyword is None:
            raise ValueError(f"{name!r} is not among the offered matches")
    acc = eng.accept(text, result, keyword)
    return jsonify({
        "accepted": True,
        "text": acc.buffer,
        "cursor": acc.cursor,
        "feedback": acc.feedback.to_dict(),
        "feedback_ms": CFG.FEEDBACK_MS,
    })


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the mention engine JSON API")
    ap.add_argument("--keywords", default=None, help="JSON file with default keywords")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose or CFG.VERBOSE:
        logging.basicConfig(level=logging.INFO)
        os.environ["MENTION_ENGINE_VERBOSE"] = "1"

    global _engine
    _engine = Engine()
    if args.keywords:
        try:
            _engine.set_keywords(load_keywords(args.keywords))
        except (OSError, ValueError) as exc:
            ap.error(f"--keywords: {exc}")

    log.info("Serving mention engine on %s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.verbose)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
