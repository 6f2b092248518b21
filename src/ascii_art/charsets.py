from collections.abc import Iterable

from ascii_art.errors import InvalidCharacterError

FIRST_PRINTABLE = 32
LAST_PRINTABLE = 126

ASCII_PRINTABLE = "".join(chr(i) for i in range(FIRST_PRINTABLE, LAST_PRINTABLE + 1))

DIGITS = "0123456789"

DEFAULT_CHARSET = DIGITS

# Keywords accepted wherever a character argument is parsed
ALL_KEYWORD = "all"
SPACE_KEYWORD = "space"


def is_supported(char: str) -> bool:
    return len(char) == 1 and FIRST_PRINTABLE <= ord(char) <= LAST_PRINTABLE


def validate_characters(characters: Iterable[str]) -> frozenset[str]:
    """Return the characters as a frozenset, rejecting anything the rasterizer can't draw."""
    result = set()
    for char in characters:
        if not isinstance(char, str) or not is_supported(char):
            raise InvalidCharacterError(char)
        result.add(char)
    return frozenset(result)


def expand_chars(argument: str) -> frozenset[str]:
    """Expand one character argument into the characters it names.

    Accepts a single character, ``space``, ``all`` (the whole printable range)
    or an inclusive range such as ``a-z`` or ``z-a``.
    """
    if argument == ALL_KEYWORD:
        return frozenset(ASCII_PRINTABLE)
    if argument == SPACE_KEYWORD:
        return frozenset(" ")
    if len(argument) == 1:
        return validate_characters(argument)
    if len(argument) == 3 and argument[1] == "-":
        start, end = argument[0], argument[2]
        if not is_supported(start) or not is_supported(end):
            raise InvalidCharacterError(argument, "range bounds must be printable ASCII")
        lo, hi = sorted((ord(start), ord(end)))
        return frozenset(chr(i) for i in range(lo, hi + 1))
    raise InvalidCharacterError(argument, "expected a character, a range like a-z, 'space' or 'all'")
