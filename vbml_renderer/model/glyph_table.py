"""Bidirectional mapping between printable characters and board glyph codes.

The table is built once at import time and exposed through read-only
mappings, so concurrent renders can share it without locking.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from vbml_renderer.model.errors import UnknownCharacterError

BLANK = 0
MIN_CODE = 0
MAX_CODE = 71
# Template-only code; never written to a canvas.
NEWLINE_CODE = 100

RED = 63
ORANGE = 64
YELLOW = 65
GREEN = 66
BLUE = 67
VIOLET = 68
WHITE = 69
BLACK = 70
FILLED = 71

COLOR_CODES: Mapping[str, int] = MappingProxyType(
    {
        "red": RED,
        "orange": ORANGE,
        "yellow": YELLOW,
        "green": GREEN,
        "blue": BLUE,
        "violet": VIOLET,
        "white": WHITE,
        "black": BLACK,
        "filled": FILLED,
    }
)

_PRINTABLE: Dict[str, int] = {" ": BLANK}
_PRINTABLE.update({letter: index + 1 for index, letter in enumerate("ABCDEFGHIJKLMNOPQRSTUVWXYZ")})
_PRINTABLE.update({digit: index + 27 for index, digit in enumerate("1234567890")})
_PRINTABLE.update(
    {
        "!": 37,
        "@": 38,
        "#": 39,
        "$": 40,
        "(": 41,
        ")": 42,
        "-": 44,
        "+": 46,
        "&": 47,
        "=": 48,
        ";": 49,
        ":": 50,
        "'": 52,
        '"': 53,
        "%": 54,
        ",": 55,
        ".": 56,
        "/": 59,
        "?": 60,
        "°": 62,
    }
)

# Symbolic placeholders for codes with no character of their own.
_PLACEHOLDERS: Dict[int, str] = {
    RED: "🟥",
    ORANGE: "🟧",
    YELLOW: "🟨",
    GREEN: "🟩",
    BLUE: "🟦",
    VIOLET: "🟪",
    WHITE: "⬜",
    BLACK: "⬛",
    FILLED: "⬜",
}

_encode_map: Dict[str, int] = dict(_PRINTABLE)
for _code, _symbol in _PLACEHOLDERS.items():
    # FILLED shares its placeholder with WHITE; encoding resolves to WHITE.
    _encode_map.setdefault(_symbol, _code)

_decode_map: Dict[int, str] = {code: char for char, code in _PRINTABLE.items()}
_decode_map.update(_PLACEHOLDERS)

CHAR_TO_CODE: Mapping[str, int] = MappingProxyType(_encode_map)
CODE_TO_CHAR: Mapping[int, str] = MappingProxyType(_decode_map)
PLACEHOLDER_CODES = frozenset(_PLACEHOLDERS)


def encode(char: str) -> int:
    """Return the glyph code for a single character.

    Letters are case-insensitive; the board only has uppercase glyphs.
    Raises ``UnknownCharacterError`` when the character has no glyph.
    """
    code = CHAR_TO_CODE.get(char)
    if code is None:
        code = CHAR_TO_CODE.get(char.upper())
    if code is None:
        raise UnknownCharacterError(char)
    return code


def decode(code: int) -> Optional[str]:
    """Return the character (or placeholder symbol) for a glyph code, if any.

    ``FILLED`` decodes to the same symbol as ``WHITE``, so encoding that
    symbol again yields ``WHITE``.
    """
    return CODE_TO_CHAR.get(code)


def is_valid_code(code: object) -> bool:
    """True when ``code`` is an integer inside the board's code range."""
    if isinstance(code, bool) or not isinstance(code, int):
        return False
    return MIN_CODE <= code <= MAX_CODE


def is_placeholder(code: int) -> bool:
    """True for color and fill codes, which decode to symbolic placeholders."""
    return code in PLACEHOLDER_CODES
