"""Common helpers shared by board writers."""
from __future__ import annotations

from typing import List

from vbml_renderer.model.canvas import Canvas
from vbml_renderer.model.glyph_table import decode, is_placeholder


def format_cell(code: int) -> str:
    """Render one cell two columns wide; placeholder symbols are already double width."""
    char = decode(code) or " "
    if is_placeholder(code):
        return char
    return f"{char:^2}"


def format_board(canvas: Canvas) -> str:
    """Draw the canvas inside a border, one text line per board row."""
    rule = " " + "-" * (canvas.cols * 2)
    lines: List[str] = [rule]
    for row in canvas:
        lines.append("|" + "".join(format_cell(code) for code in row) + "|")
    lines.append(rule)
    return "\n".join(lines) + "\n"
