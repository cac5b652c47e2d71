# src/e2e/test_matcher_rules.py

from mention_engine.matcher import match_kinds, matches


def test_exact_prefix_is_case_insensitive():
    assert matches("le", "Leah")
    assert match_kinds("LE", "Leah").exact_prefix


def test_full_keyword_is_not_an_exact_prefix_but_first_char_still_matches():
    kinds = match_kinds("Leah", "Leah")
    assert not kinds.exact_prefix
    assert kinds.first_char
    assert matches("Leah", "Leah")


def test_first_character_rule_ignores_the_rest_of_the_fragment():
    kinds = match_kinds("Lx", "Leah")
    assert kinds.first_char and not kinds.exact_prefix
    assert matches("沈x", "沈知夏")


def test_phonetic_prefix_on_chinese_names():
    kinds = match_kinds("wangx", "王小明")
    assert kinds.phonetic_prefix
    assert not kinds.first_char_phonetic
    assert matches("WANGXIAO", "王小明")


def test_first_char_phonetic_prefix():
    kinds = match_kinds("wa", "王小明")
    assert kinds.first_char_phonetic and kinds.phonetic_prefix
    assert kinds.labels() == ["phonetic_prefix", "first_char_phonetic"]


def test_fragment_is_trimmed_before_matching():
    assert matches("  le ", "Leah")


def test_empty_inputs_never_match():
    assert not matches("", "Leah")
    assert not matches("   ", "Leah")
    assert not matches("Le", "")
    assert not match_kinds("Le", "")


def test_unrelated_words_do_not_match():
    assert not matches("xy", "Leah")
    assert not matches("zh", "王小明")
