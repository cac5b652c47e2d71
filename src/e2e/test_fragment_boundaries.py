# src/e2e/test_fragment_boundaries.py

import pytest

from mention_engine.fragment import locate_fragment
from mention_engine.models import Fragment


def test_cursor_at_end_of_word_and_after_the_space():
    assert locate_fragment("ab cd", 2) == Fragment("ab", 0, 2)
    assert locate_fragment("ab cd", 3) == Fragment("cd", 3, 5)


def test_cursor_between_two_delimiters_has_no_fragment():
    assert locate_fragment("ab  cd", 3) is None
    assert locate_fragment("ab ", 3) is None
    assert locate_fragment("ab\n\tcd", 3) is None


def test_cursor_inside_word_spans_both_sides():
    assert locate_fragment("hello world", 2) == Fragment("hello", 0, 5)
    assert locate_fragment("hello world", 8) == Fragment("world", 6, 11)


def test_cursor_zero_only_sees_a_word_starting_at_zero():
    assert locate_fragment("Leo runs", 0) == Fragment("Leo", 0, 3)
    assert locate_fragment(" Leo", 0) is None


@pytest.mark.parametrize("cursor,expected", [(-5, Fragment("ab", 0, 2)), (99, Fragment("cd", 3, 5))])
def test_out_of_range_cursor_is_clamped(cursor, expected):
    assert locate_fragment("ab cd", cursor) == expected


def test_all_four_delimiters_split_words():
    buf = "a\tb\rc\nd e"
    assert locate_fragment(buf, 3).text == "b"
    assert locate_fragment(buf, 5).text == "c"
    assert locate_fragment(buf, 7).text == "d"


def test_punctuation_is_part_of_the_word():
    assert locate_fragment("hi, Le.", 7) == Fragment("Le.", 4, 7)


def test_empty_and_blank_buffers():
    assert locate_fragment("", 0) is None
    assert locate_fragment("   ", 2) is None


def test_cjk_and_astral_characters():
    assert locate_fragment("他说沈知", 4) == Fragment("他说沈知", 0, 4)
    assert locate_fragment("\U0001F600x y", 1).text == "\U0001F600x"


def test_fragment_text_matches_buffer_slice_and_is_idempotent():
    buf = "go to Le here"
    for cur in range(len(buf) + 1):
        a = locate_fragment(buf, cur)
        b = locate_fragment(buf, cur)
        assert a == b
        if a is not None:
            assert 0 <= a.start < a.end <= len(buf)
            assert buf[a.start:a.end] == a.text
            assert not any(ch in a.text for ch in " \n\t\r")
