"""Wrap token streams into fixed-width code rows and justify each row."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from vbml_renderer.model.elements import Justify
from vbml_renderer.model.glyph_table import BLANK
from vbml_renderer.parser.template_parser import TOKEN_GLYPH, TOKEN_NEWLINE, TOKEN_SPACE, Token
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

Word = List[int]


@dataclass(slots=True)
class WrappedLine:
    """Words on one line; ``indent`` is the explicit leading space count."""

    words: List[Word] = field(default_factory=list)
    gaps: List[int] = field(default_factory=list)
    indent: int = 0

    @property
    def length(self) -> int:
        return self.indent + sum(len(word) for word in self.words) + sum(self.gaps)

    def is_empty(self) -> bool:
        return not self.words

    def codes(self) -> List[int]:
        """Line content without any justification padding."""
        codes: List[int] = [BLANK] * self.indent
        for index, word in enumerate(self.words):
            if index:
                codes.extend([BLANK] * self.gaps[index - 1])
            codes.extend(word)
        return codes


@dataclass(slots=True)
class _Paragraph:
    words: List[Word] = field(default_factory=list)
    # Spaces that preceded each word in the source text
    spacing: List[int] = field(default_factory=list)


class TextShaper:
    """Shape tokens into lines of exactly ``width`` glyph codes."""

    def __init__(self, width: int, justify: Justify = Justify.LEFT) -> None:
        if width < 0:
            raise ValueError(f"Shaping width must not be negative, got {width}")
        self._width = width
        self._justify = justify

    @property
    def width(self) -> int:
        return self._width

    def shape(self, tokens: Sequence[Token]) -> List[List[int]]:
        """Wrap and justify ``tokens``; every returned row has ``width`` codes."""
        if self._width == 0:
            return []
        lines = self.wrap(tokens)
        LOGGER.debug("Wrapped %d token(s) into %d line(s) at width %d", len(tokens), len(lines), self._width)
        return [self.justify_line(line) for line in lines]

    # ------------------------------------------------------------------
    # Wrapping
    def wrap(self, tokens: Sequence[Token]) -> List[WrappedLine]:
        """Break tokens into lines no wider than ``width``."""
        if not tokens:
            return []
        lines: List[WrappedLine] = []
        for paragraph in self._split_paragraphs(tokens):
            lines.extend(self._wrap_paragraph(paragraph))
        return lines

    def _split_paragraphs(self, tokens: Sequence[Token]) -> List[_Paragraph]:
        paragraphs = [_Paragraph()]
        pending_spaces = 0
        in_word = False
        for token in tokens:
            current = paragraphs[-1]
            if token.kind == TOKEN_NEWLINE:
                paragraphs.append(_Paragraph())
                pending_spaces = 0
                in_word = False
            elif token.kind == TOKEN_SPACE:
                pending_spaces += 1
                in_word = False
            elif token.kind == TOKEN_GLYPH:
                if in_word:
                    current.words[-1].append(token.code)
                else:
                    current.words.append([token.code])
                    current.spacing.append(pending_spaces)
                    pending_spaces = 0
                    in_word = True
            else:
                raise ValueError(f"Unsupported token kind: {token.kind}")
        # Trailing spaces before a newline or the end of text are dropped.
        return paragraphs

    def _wrap_paragraph(self, paragraph: _Paragraph) -> List[WrappedLine]:
        width = self._width
        lines: List[WrappedLine] = []
        current = WrappedLine()

        for index, word in enumerate(paragraph.words):
            # Spaces at a wrap point are not carried onto the new line.
            gap = 0 if current.is_empty() and lines else paragraph.spacing[index]

            if current.length + gap + len(word) <= width:
                self._append(current, word, gap)
                continue

            if not current.is_empty():
                lines.append(current)
                current = WrappedLine()
            # An indent that cannot fit alongside the word is dropped too.
            gap = 0

            while len(word) > width:
                lines.append(WrappedLine(words=[word[:width]]))
                word = word[width:]
            if word:
                self._append(current, word, gap)

        if not current.is_empty() or not lines:
            lines.append(current)
        return lines

    @staticmethod
    def _append(line: WrappedLine, word: Word, gap: int) -> None:
        if line.is_empty():
            line.indent = gap
        else:
            line.gaps.append(gap)
        line.words.append(list(word))

    # ------------------------------------------------------------------
    # Justification
    def justify_line(self, line: WrappedLine) -> List[int]:
        """Pad or stretch ``line`` to exactly ``width`` codes."""
        width = self._width
        if self._justify is Justify.JUSTIFIED and len(line.words) >= 2:
            return self._stretch(line.words, width)

        content = line.codes()[:width]
        remainder = width - len(content)
        if self._justify is Justify.RIGHT:
            return [BLANK] * remainder + content
        if self._justify is Justify.CENTER:
            left = remainder // 2
            return [BLANK] * left + content + [BLANK] * (remainder - left)
        if self._justify is Justify.JUSTIFIED:
            # A single word cannot stretch; it is left-aligned without its indent.
            content = WrappedLine(words=line.words).codes()
            return content + [BLANK] * (width - len(content))
        return content + [BLANK] * remainder

    @staticmethod
    def _stretch(words: Sequence[Word], width: int) -> List[int]:
        gap_count = len(words) - 1
        spare = width - sum(len(word) for word in words)
        base, extra = divmod(spare, gap_count)
        codes: List[int] = []
        for index, word in enumerate(words):
            if index:
                # Leftmost gaps absorb the remainder first.
                codes.extend([BLANK] * (base + (1 if index <= extra else 0)))
            codes.extend(word)
        return codes
