"""Error taxonomy shared by every render stage."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tag identifying a render failure or warning."""

    UNKNOWN_CHARACTER = "UnknownCharacter"
    CODE_OUT_OF_RANGE = "CodeOutOfRange"
    MISSING_PROP = "MissingProp"
    OUT_OF_BOUNDS = "OutOfBounds"
    CONTENT_OVERFLOW = "ContentOverflow"
    COMPONENT_OFF_CANVAS = "ComponentOffCanvas"
    INVALID_CODE = "InvalidCode"


class RenderError(Exception):
    """Base class for failures that abort a render."""

    kind: ErrorKind

    def __init__(self, message: str, component_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.component_index = component_index

    def with_component(self, index: int) -> "RenderError":
        """Attach the index of the component being rendered, if not already known."""
        if self.component_index is None:
            self.component_index = index
        return self

    def __str__(self) -> str:
        if self.component_index is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} (component {self.component_index}): {self.message}"


class UnknownCharacterError(RenderError):
    kind = ErrorKind.UNKNOWN_CHARACTER

    def __init__(self, character: str, component_index: Optional[int] = None) -> None:
        super().__init__(f"no glyph for character {character!r}", component_index)
        self.character = character


class CodeOutOfRangeError(RenderError):
    kind = ErrorKind.CODE_OUT_OF_RANGE

    def __init__(self, code: int, component_index: Optional[int] = None) -> None:
        super().__init__(f"glyph code {code} is outside the valid range", component_index)
        self.code = code


class MissingPropError(RenderError):
    kind = ErrorKind.MISSING_PROP

    def __init__(self, name: str, component_index: Optional[int] = None) -> None:
        super().__init__(f"template references undefined prop {name!r}", component_index)
        self.name = name


class OutOfBoundsError(RenderError):
    kind = ErrorKind.OUT_OF_BOUNDS


class InvalidCodeError(RenderError):
    kind = ErrorKind.INVALID_CODE

    def __init__(self, code: object, message: Optional[str] = None, component_index: Optional[int] = None) -> None:
        super().__init__(message or f"invalid glyph code {code!r}", component_index)
        self.code = code


class CanvasIndexError(IndexError):
    """Raised when a canvas cell outside the grid is addressed."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(f"cell ({row}, {col}) is outside a {rows}x{cols} canvas")
        self.row = row
        self.col = col


@dataclass(frozen=True, slots=True)
class RenderWarning:
    """Recoverable condition reported alongside a successful render."""

    kind: ErrorKind
    message: str
    component_index: Optional[int] = None

    def __str__(self) -> str:
        if self.component_index is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} (component {self.component_index}): {self.message}"
