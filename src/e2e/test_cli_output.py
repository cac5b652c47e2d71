# src/e2e/test_cli_output.py

import json
from pathlib import Path

import pytest

from mention_engine.__main__ import main


def test_json_output_reports_match_and_highlights(capsys):
    rc = main(["--keyword", "Leah", "--keyword", "Leo:Character", "--text", "Leo met Le", "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["fragment"] == {"text": "Le", "start": 8, "end": 10}
    assert out["result"]["best_match"]["name"] == "Leo"
    assert out["result"]["ghost_suffix"] == "o"
    assert out["highlights"] == [{"start": 0, "end": 3, "kind": "keyword"}]


def test_text_output_with_explain(capsys):
    main(["--keyword", "王小明:Character", "--text", "wa", "--explain"])
    out = capsys.readouterr().out
    assert "王小明" in out
    assert "phonetic_prefix" in out


def test_keywords_file_and_cursor(tmp_path: Path, capsys):
    path = tmp_path / "kw.json"
    path.write_text(json.dumps({"keywords": [{"name": "Old Mill", "category": "Location"}]}), encoding="utf-8")
    main(["--keywords", str(path), "--text", "Ol there", "--cursor", "2", "--json"])
    out = json.loads(capsys.readouterr().out)
    assert out["result"]["best_match"] == {"name": "Old Mill", "category": "Location"}


def test_missing_keywords_is_a_usage_error():
    with pytest.raises(SystemExit):
        main(["--text", "Le"])
