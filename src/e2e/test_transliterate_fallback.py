# src/e2e/test_transliterate_fallback.py

import pytest

import mention_engine.transliterate as T


@pytest.fixture(autouse=True)
def fresh_cache():
    T.to_romanized.cache_clear()
    T.first_char_romanized.cache_clear()
    yield
    T.to_romanized.cache_clear()
    T.first_char_romanized.cache_clear()


def test_chinese_is_romanized_without_tones():
    assert T.to_romanized("王小明") == "wangxiaoming"
    assert T.first_char_romanized("王小明") == "wang"


def test_latin_text_is_lower_cased_and_stripped():
    assert T.to_romanized("Leah") == "leah"
    assert T.to_romanized("Anne Marie") == "annemarie"
    assert T.first_char_romanized("Leah") == "l"


def test_empty_input():
    assert T.to_romanized("") == ""
    assert T.first_char_romanized("") == ""


def test_failure_falls_back_to_lower_casing(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("dictionary unavailable")

    monkeypatch.setattr(T, "lazy_pinyin", boom)
    assert T.to_romanized("王Ab") == "王ab"
    assert T.first_char_romanized("Ab") == "a"
