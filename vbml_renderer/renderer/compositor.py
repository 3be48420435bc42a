"""Paint rendered blocks onto a canvas in document order."""
from __future__ import annotations

from typing import Iterable, List, Tuple

from vbml_renderer.model.canvas import Canvas
from vbml_renderer.model.elements import LayoutBox
from vbml_renderer.model.errors import ErrorKind, RenderWarning
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class Compositor:
    """Copy each box's block into a fresh canvas; later boxes overwrite earlier ones."""

    def __init__(self, rows: int, cols: int) -> None:
        self._rows = rows
        self._cols = cols

    def compose(self, boxes: Iterable[LayoutBox]) -> Tuple[Canvas, List[RenderWarning]]:
        """Return the frozen canvas and any off-canvas warnings."""
        canvas = Canvas(self._rows, self._cols)
        warnings: List[RenderWarning] = []

        for box in boxes:
            if not box.rect.intersects(self._rows, self._cols):
                warning = RenderWarning(
                    kind=ErrorKind.COMPONENT_OFF_CANVAS,
                    message=(
                        f"rectangle at ({box.rect.x}, {box.rect.y}) sized {box.rect.width}x{box.rect.height} "
                        f"lies outside the {self._rows}x{self._cols} canvas"
                    ),
                    component_index=box.component_index,
                )
                LOGGER.warning("%s", warning)
                warnings.append(warning)
                continue
            self._paint(canvas, box)

        return canvas.freeze(), warnings

    @staticmethod
    def _paint(canvas: Canvas, box: LayoutBox) -> None:
        origin_x, origin_y = box.rect.x, box.rect.y
        for row_offset, row in enumerate(box.block.rows):
            target_row = origin_y + row_offset
            if not 0 <= target_row < canvas.rows:
                continue
            for col_offset, code in enumerate(row):
                target_col = origin_x + col_offset
                if 0 <= target_col < canvas.cols:
                    canvas.set(target_row, target_col, code)
