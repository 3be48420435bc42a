"""Write a finished canvas to disk as board text or row-major JSON."""
from __future__ import annotations

import json
from pathlib import Path

from vbml_renderer.model.canvas import Canvas
from vbml_renderer.renderer.utils import format_board
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class TextRenderer:
    """Produce a bordered, human readable picture of the board."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def render(self, canvas: Canvas) -> None:
        self._output_path.write_text(format_board(canvas), encoding="utf-8")
        LOGGER.debug("Wrote board text to %s", self._output_path)


class JsonRenderer:
    """Produce the row-major integer array that board APIs accept."""

    def __init__(self, output_path: Path, indent: int | None = None) -> None:
        self._output_path = output_path
        self._indent = indent

    def render(self, canvas: Canvas) -> None:
        payload = json.dumps(canvas.to_list(), indent=self._indent)
        self._output_path.write_text(payload, encoding="utf-8")
        LOGGER.debug("Wrote board JSON to %s", self._output_path)
