"""Assign every component a canvas rectangle and render its block."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Sequence, Tuple

from vbml_renderer.model.elements import (
    AUTO,
    Align,
    Component,
    Document,
    LayoutBox,
    PropValue,
    RawComponent,
    Rect,
    RenderedBlock,
    TemplateComponent,
)
from vbml_renderer.model.errors import ErrorKind, InvalidCodeError, OutOfBoundsError, RenderError, RenderWarning
from vbml_renderer.model.glyph_table import BLANK, is_valid_code
from vbml_renderer.model.style_model import ResolvedStyle, StyleResolver
from vbml_renderer.parser.template_parser import TemplateParser
from vbml_renderer.parser.text_shaper import TextShaper
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class LayoutContext:
    """Mutable flow cursor, scoped to a single render pass."""

    rows: int
    cols: int
    cursor_row: int = 0
    cursor_col: int = 0
    row_height: int = 0

    @property
    def remaining_cols(self) -> int:
        return max(self.cols - self.cursor_col, 0)

    @property
    def exhausted(self) -> bool:
        return self.cursor_row >= self.rows

    def start_new_row(self) -> None:
        self.cursor_row += self.row_height
        self.cursor_col = 0
        self.row_height = 0

    def advance(self, width: int, height: int) -> None:
        self.cursor_col += width
        self.row_height = max(self.row_height, height)


@dataclass(slots=True)
class LayoutResult:
    """Boxes in document order plus the warnings raised while laying them out."""

    boxes: List[LayoutBox] = field(default_factory=list)
    warnings: List[RenderWarning] = field(default_factory=list)


def vertical_offsets(line_count: int, height: int, align: Align) -> List[int]:
    """Return the row inside the block at which each line is drawn.

    ``line_count`` must not exceed ``height``. For ``justified`` the blank
    rows are spread over the slots above, between and below the lines; no
    two slots differ by more than one row and leftover rows go to the
    lowest slots first.
    """
    if line_count <= 0:
        return []
    spare = max(height - line_count, 0)

    if align is Align.BOTTOM:
        top = spare
    elif align is Align.CENTER:
        top = spare // 2
    elif align is Align.JUSTIFIED:
        slots = line_count + 1
        base, extra = divmod(spare, slots)
        gaps = [base + (1 if slot >= slots - extra else 0) for slot in range(slots)]
        offsets: List[int] = []
        position = gaps[0]
        for index in range(line_count):
            offsets.append(position)
            position += 1 + gaps[index + 1]
        return offsets
    else:
        top = 0
    return [top + index for index in range(line_count)]


def align_lines(lines: Sequence[Sequence[int]], width: int, height: int, align: Align) -> RenderedBlock:
    """Place shaped lines into a ``width`` x ``height`` block."""
    block = RenderedBlock.blank(width, height)
    visible = list(lines)[:height]
    for offset, line in zip(vertical_offsets(len(visible), height, align), visible):
        block.rows[offset] = list(line[:width]) + [BLANK] * max(width - len(line), 0)
    return block


class LayoutCalculator:
    """Resolve component rectangles with flow and absolute placement."""

    def __init__(self, resolver: StyleResolver, rows: int, cols: int) -> None:
        self._resolver = resolver
        self._rows = rows
        self._cols = cols

    # ------------------------------------------------------------------
    # Public API
    def calculate(self, document: Document) -> LayoutResult:
        """Return one box per component, in document order.

        Raises ``RenderError`` subclasses for fatal conditions; recoverable
        ones are collected in ``LayoutResult.warnings``.
        """
        context = LayoutContext(rows=self._rows, cols=self._cols)
        result = LayoutResult()

        for index, component in enumerate(document.components):
            try:
                box = self._layout_component(index, component, document.props, context, result.warnings)
            except RenderError as exc:
                exc.with_component(index)
                raise
            LOGGER.debug(
                "Component %d (%s) placed at (%d, %d) size %dx%d",
                index,
                box.element_type,
                box.rect.x,
                box.rect.y,
                box.rect.width,
                box.rect.height,
            )
            result.boxes.append(box)

        return result

    # ------------------------------------------------------------------
    # Component layout
    def _layout_component(
        self,
        index: int,
        component: Component,
        props: Mapping[str, PropValue],
        context: LayoutContext,
        warnings: List[RenderWarning],
    ) -> LayoutBox:
        style = self._resolver.resolve(component.style)
        if isinstance(component, TemplateComponent):
            return self._layout_template(index, component, style, props, context, warnings)
        if isinstance(component, RawComponent):
            return self._layout_raw(index, component, style, context, warnings)
        raise TypeError(f"Unsupported component type: {type(component).__name__}")

    def _layout_template(
        self,
        index: int,
        component: TemplateComponent,
        style: ResolvedStyle,
        props: Mapping[str, PropValue],
        context: LayoutContext,
        warnings: List[RenderWarning],
    ) -> LayoutBox:
        visible_props = {**props, **component.props}
        tokens = TemplateParser(visible_props).tokenize(component.template)

        x, y, width, clipped = self._resolve_origin(index, style, context, warnings)
        lines = TextShaper(width, style.justify).shape(tokens)
        height = self._resolve_height(style, y, natural=max(len(lines), 1))
        rect = Rect(x, y, width, height)
        self._check_bounds(index, rect, style)

        truncated = max(len(lines) - height, 0)
        below = self._rows_below_canvas(style, rect, min(len(lines), height), style.align)
        if (truncated or below) and not clipped:
            self._warn(
                warnings,
                ErrorKind.CONTENT_OVERFLOW,
                f"{truncated + below} of {len(lines)} line(s) dropped: "
                f"{truncated} beyond height {height}, {below} below the canvas",
                index,
            )

        block = align_lines(lines, width, height, style.align)
        self._advance(style, context, rect)
        return LayoutBox(
            component_index=index,
            element_type="template",
            rect=rect,
            block=block,
            absolute=style.is_absolute,
            content_height=len(lines),
        )

    def _layout_raw(
        self,
        index: int,
        component: RawComponent,
        style: ResolvedStyle,
        context: LayoutContext,
        warnings: List[RenderWarning],
    ) -> LayoutBox:
        self._validate_raw(component)

        x, y, width, clipped = self._resolve_origin(index, style, context, warnings)
        height = self._resolve_height(style, y, natural=component.natural_height)
        rect = Rect(x, y, width, height)
        self._check_bounds(index, rect, style)

        below = self._rows_below_canvas(style, rect, min(component.natural_height, height), Align.TOP)
        if below and not clipped:
            self._warn(
                warnings,
                ErrorKind.CONTENT_OVERFLOW,
                f"{below} of {component.natural_height} raw row(s) fall below the canvas",
                index,
            )

        block = RenderedBlock.blank(width, height)
        for row_index, source_row in enumerate(component.raw_characters[:height]):
            for col_index, code in enumerate(source_row[:width]):
                block.rows[row_index][col_index] = code

        self._advance(style, context, rect)
        return LayoutBox(
            component_index=index,
            element_type="raw",
            rect=rect,
            block=block,
            absolute=style.is_absolute,
            content_height=component.natural_height,
        )

    # ------------------------------------------------------------------
    # Placement helpers
    def _resolve_origin(
        self,
        index: int,
        style: ResolvedStyle,
        context: LayoutContext,
        warnings: List[RenderWarning],
    ) -> Tuple[int, int, int, bool]:
        """Return ``(x, y, width, clipped)`` for the component."""
        position = style.absolute_position
        if position is not None:
            width = style.width if style.width is not None else self._cols - position.x
            return position.x, position.y, max(width, 0), False

        width = style.width
        if width is None:
            if context.remaining_cols == 0:
                context.start_new_row()
            width = context.remaining_cols
        elif context.cursor_col > 0 and context.cursor_col + width > context.cols:
            context.start_new_row()
        if width > context.remaining_cols:
            # Only a row-leading component can be wider than the canvas.
            LOGGER.debug("Component %d width %d capped to %d columns", index, width, context.remaining_cols)
            width = context.remaining_cols

        clipped = context.exhausted
        if clipped:
            self._warn(
                warnings,
                ErrorKind.CONTENT_OVERFLOW,
                f"flow layout ran out of canvas rows at row {context.cursor_row}; component clipped",
                index,
            )
        return context.cursor_col, context.cursor_row, max(width, 0), clipped

    def _resolve_height(self, style: ResolvedStyle, y: int, natural: int) -> int:
        remaining = max(self._rows - y, 0)
        if style.height == AUTO:
            return min(natural, remaining)
        if style.height is not None:
            return max(int(style.height), 0)
        return remaining

    def _check_bounds(self, index: int, rect: Rect, style: ResolvedStyle) -> None:
        if not style.is_absolute or not self._resolver.defaults.strict_bounds:
            return
        # An origin on the right or bottom edge leaves a zero-area rectangle that would still "fit".
        if not rect.fits(self._rows, self._cols) or rect.x >= self._cols or rect.y >= self._rows:
            raise OutOfBoundsError(
                f"absolute rectangle at ({rect.x}, {rect.y}) sized {rect.width}x{rect.height} "
                f"does not fit a {self._rows}x{self._cols} canvas",
                index,
            )

    def _rows_below_canvas(self, style: ResolvedStyle, rect: Rect, line_count: int, align: Align) -> int:
        """Count the content rows a flowing rectangle would place past the last canvas row."""
        if style.is_absolute or rect.bottom <= self._rows:
            return 0
        offsets = vertical_offsets(line_count, rect.height, align)
        return sum(1 for offset in offsets if rect.y + offset >= self._rows)

    @staticmethod
    def _advance(style: ResolvedStyle, context: LayoutContext, rect: Rect) -> None:
        if not style.is_absolute:
            context.advance(rect.width, rect.height)

    @staticmethod
    def _validate_raw(component: RawComponent) -> None:
        for row_index, row in enumerate(component.raw_characters):
            for col_index, code in enumerate(row):
                if not is_valid_code(code):
                    raise InvalidCodeError(code, f"raw cell ({row_index}, {col_index}) holds invalid glyph code {code!r}")

    @staticmethod
    def _warn(warnings: List[RenderWarning], kind: ErrorKind, message: str, index: int) -> None:
        warning = RenderWarning(kind=kind, message=message, component_index=index)
        LOGGER.warning("%s", warning)
        warnings.append(warning)
