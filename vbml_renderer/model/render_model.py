"""Aggregate outcome of a render pass."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from vbml_renderer.model.canvas import Canvas
from vbml_renderer.model.elements import LayoutBox
from vbml_renderer.model.errors import RenderError, RenderWarning


@dataclass(slots=True)
class RenderResult:
    """Tagged render outcome: a canvas with warnings, or a fatal error.

    A failed render never carries a partial canvas.
    """

    canvas: Optional[Canvas] = None
    error: Optional[RenderError] = None
    warnings: List[RenderWarning] = field(default_factory=list)
    boxes: List[LayoutBox] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.canvas is not None

    def unwrap(self) -> Canvas:
        """Return the canvas, re-raising the fatal error if the render failed."""
        if self.error is not None:
            raise self.error
        if self.canvas is None:
            raise RuntimeError("Render produced neither a canvas nor an error")
        return self.canvas
