import pytest

from ascii_art.charsets import ASCII_PRINTABLE, DEFAULT_CHARSET, expand_chars, is_supported, validate_characters
from ascii_art.errors import InvalidCharacterError


def test_printable_range():
    assert len(ASCII_PRINTABLE) == 95
    assert ASCII_PRINTABLE[0] == " "
    assert ASCII_PRINTABLE[-1] == "~"


def test_default_charset_is_digits():
    assert DEFAULT_CHARSET == "0123456789"


def test_is_supported():
    assert is_supported("a")
    assert is_supported(" ")
    assert not is_supported("\n")
    assert not is_supported("ab")


def test_validate_deduplicates():
    assert validate_characters("aab") == frozenset("ab")


def test_validate_rejects_non_strings():
    with pytest.raises(InvalidCharacterError):
        validate_characters([65, 66])


def test_expand_single_character():
    assert expand_chars("x") == frozenset("x")


def test_expand_keywords():
    assert expand_chars("space") == frozenset(" ")
    assert expand_chars("all") == frozenset(ASCII_PRINTABLE)


def test_expand_range_either_order():
    assert expand_chars("a-e") == frozenset("abcde")
    assert expand_chars("e-a") == frozenset("abcde")


def test_expand_hyphen_alone():
    assert expand_chars("-") == frozenset("-")


@pytest.mark.parametrize("bad", ["abc", "a-", "a-é", "\x01", "a--b"])
def test_expand_rejects_malformed(bad):
    with pytest.raises(InvalidCharacterError):
        expand_chars(bad)
