"""In-memory representation of a board document and its layout."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple, Union

AUTO = "auto"

PropValue = Union[str, int]


class Justify(str, Enum):
    """Horizontal justification of text inside a component."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFIED = "justified"
    NONE = "none"


class Align(str, Enum):
    """Vertical alignment of shaped lines inside a component."""

    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"
    JUSTIFIED = "justified"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class AbsolutePosition:
    """Top-left cell of an absolutely placed component."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ComponentStyle:
    """Per-component style; ``None`` fields fall back to inherited defaults."""

    width: Optional[int] = None
    height: Optional[Union[int, str]] = None
    justify: Optional[Justify] = None
    align: Optional[Align] = None
    absolute_position: Optional[AbsolutePosition] = None

    @property
    def auto_height(self) -> bool:
        return self.height == AUTO


@dataclass(frozen=True, slots=True)
class BoardStyle:
    """Document-wide style: canvas dimensions plus default justify/align."""

    width: Optional[int] = None
    height: Optional[int] = None
    justify: Optional[Justify] = None
    align: Optional[Align] = None


def _freeze_props(props: Optional[Mapping[str, PropValue]]) -> Mapping[str, PropValue]:
    return MappingProxyType(dict(props or {}))


@dataclass(frozen=True, slots=True)
class TemplateComponent:
    """Markup string rendered through the text shaper."""

    template: str
    style: ComponentStyle = field(default_factory=ComponentStyle)
    props: Mapping[str, PropValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", _freeze_props(self.props))


@dataclass(frozen=True, slots=True)
class RawComponent:
    """Explicit rectangle of glyph codes, placed verbatim."""

    raw_characters: Sequence[Sequence[int]]
    style: ComponentStyle = field(default_factory=ComponentStyle)

    def __post_init__(self) -> None:
        frozen = tuple(tuple(row) for row in self.raw_characters)
        object.__setattr__(self, "raw_characters", frozen)

    @property
    def natural_height(self) -> int:
        return len(self.raw_characters)


Component = TemplateComponent | RawComponent


@dataclass(frozen=True, slots=True)
class Document:
    """Parsed markup: global props, board style and ordered components.

    Component order is both the flow order and the paint order.
    """

    components: Sequence[Component] = ()
    props: Mapping[str, PropValue] = field(default_factory=dict)
    style: BoardStyle = field(default_factory=BoardStyle)

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "props", _freeze_props(self.props))


@dataclass(frozen=True, slots=True)
class Rect:
    """Cell rectangle on the canvas, origin at the top-left."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def fits(self, rows: int, cols: int) -> bool:
        """True when the whole rectangle lies inside a ``rows`` x ``cols`` grid."""
        return self.x >= 0 and self.y >= 0 and self.right <= cols and self.bottom <= rows

    def intersects(self, rows: int, cols: int) -> bool:
        """True when at least one cell of the rectangle lies inside the grid."""
        if self.width <= 0 or self.height <= 0:
            return False
        return self.x < cols and self.y < rows and self.right > 0 and self.bottom > 0


@dataclass(slots=True)
class RenderedBlock:
    """Rectangular array of glyph codes produced for a single component."""

    width: int
    height: int
    rows: List[List[int]]

    @classmethod
    def blank(cls, width: int, height: int) -> "RenderedBlock":
        return cls(width=width, height=height, rows=[[0] * width for _ in range(height)])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width


@dataclass(slots=True)
class LayoutBox:
    """A component's resolved rectangle together with its rendered block."""

    component_index: int
    element_type: str
    rect: Rect
    block: RenderedBlock
    absolute: bool = False
    content_height: int = 0
