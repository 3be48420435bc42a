"""Tokenize component templates into glyph, space and line-break tokens."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional

from vbml_renderer.model.elements import PropValue
from vbml_renderer.model.errors import CodeOutOfRangeError, MissingPropError
from vbml_renderer.model.glyph_table import BLANK, NEWLINE_CODE, encode, is_valid_code
from vbml_renderer.utils.text_normalizer import TextNormalizer

TOKEN_GLYPH = "glyph"
TOKEN_SPACE = "space"
TOKEN_NEWLINE = "newline"

# {{name}} and {name} substitute props, {N} inserts a raw glyph code.
TEMPLATE_PATTERN = re.compile(
    r"\{\{(?P<double>[A-Za-z0-9_]+)\}\}"
    r"|\{(?P<code>\d+)\}"
    r"|\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)\}"
)
# Prop values may carry code tokens but never further prop references.
PROP_VALUE_PATTERN = re.compile(r"\{(?P<code>\d+)\}")


@dataclass(frozen=True, slots=True)
class Token:
    """Single unit of shaped text."""

    kind: str
    code: int = BLANK


SPACE = Token(TOKEN_SPACE)
NEWLINE = Token(TOKEN_NEWLINE)


class TemplateParser:
    """Scan a template left to right and resolve every token to glyph codes."""

    def __init__(self, props: Optional[Mapping[str, PropValue]] = None, normalizer: Optional[TextNormalizer] = None) -> None:
        self._props = props or {}
        self._normalizer = normalizer or TextNormalizer()

    def tokenize(self, template: str) -> List[Token]:
        """Return the token stream for ``template``.

        Raises ``UnknownCharacterError``, ``CodeOutOfRangeError`` or
        ``MissingPropError`` for unresolved content.
        """
        text = self._normalizer.normalize_text(template) or ""
        return list(self._scan(text, TEMPLATE_PATTERN, allow_props=True))

    def _scan(self, text: str, pattern: re.Pattern, allow_props: bool) -> Iterator[Token]:
        position = 0
        for match in pattern.finditer(text):
            yield from self._literal_tokens(text[position : match.start()])
            code = match.group("code")
            if code is not None:
                yield self._code_token(int(code))
            elif allow_props:
                yield from self._prop_tokens(match.group("double") or match.group("name"))
            position = match.end()
        yield from self._literal_tokens(text[position:])

    def _literal_tokens(self, text: str) -> Iterator[Token]:
        for char in text:
            if char == "\n":
                yield NEWLINE
            elif char == " ":
                yield SPACE
            else:
                yield Token(TOKEN_GLYPH, encode(char))

    def _code_token(self, code: int) -> Token:
        if code == NEWLINE_CODE:
            return NEWLINE
        if not is_valid_code(code):
            raise CodeOutOfRangeError(code)
        return Token(TOKEN_GLYPH, code)

    def _prop_tokens(self, name: str) -> Iterator[Token]:
        if name not in self._props:
            raise MissingPropError(name)
        value = self._props[name]
        if isinstance(value, bool):
            value = str(value).lower()
        if isinstance(value, int):
            yield self._code_token(value)
            return
        text = self._normalizer.normalize_text(str(value)) or ""
        yield from self._scan(text, PROP_VALUE_PATTERN, allow_props=False)
