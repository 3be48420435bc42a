"""Entry-point for the board rendering pipeline."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from vbml_renderer.model.elements import Document
from vbml_renderer.model.errors import RenderError
from vbml_renderer.model.render_model import RenderResult
from vbml_renderer.model.style_model import ENGINE_DEFAULTS, StyleDefaults, StyleResolver
from vbml_renderer.parser.layout_calculator import LayoutCalculator
from vbml_renderer.parser.vbml_parser import load_document
from vbml_renderer.renderer.board_renderer import JsonRenderer, TextRenderer
from vbml_renderer.renderer.compositor import Compositor
from vbml_renderer.renderer.utils import format_board
from vbml_renderer.utils.debug import DebugDumper
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


def render_document(
    document: Document,
    rows: Optional[int] = None,
    cols: Optional[int] = None,
    *,
    defaults: StyleDefaults = ENGINE_DEFAULTS,
) -> RenderResult:
    """Lay out and composite a document onto a fresh canvas.

    Fatal conditions are returned in ``RenderResult.error`` with no canvas;
    recoverable ones are listed in ``RenderResult.warnings``.
    """
    resolver = StyleResolver(document.style, defaults)
    rows, cols = resolver.canvas_size(rows, cols)

    try:
        layout = LayoutCalculator(resolver, rows, cols).calculate(document)
    except RenderError as exc:
        LOGGER.debug("Render aborted: %s", exc)
        return RenderResult(error=exc)

    canvas, paint_warnings = Compositor(rows, cols).compose(layout.boxes)
    return RenderResult(canvas=canvas, warnings=layout.warnings + paint_warnings, boxes=layout.boxes)


def write_outputs(result: RenderResult, output_dir: Path) -> None:
    """Write the board text, the JSON payload and a debug dump."""
    output_dir.mkdir(parents=True, exist_ok=True)
    canvas = result.unwrap()
    TextRenderer(output_dir / "board.txt").render(canvas)
    JsonRenderer(output_dir / "board.json").render(canvas)
    DebugDumper(output_dir / "debug").dump(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Render a VBML file and print the resulting board."""
    import argparse

    parser = argparse.ArgumentParser(description="Render a VBML document onto a board-sized grid of glyph codes")
    parser.add_argument("vbml_file", help="Path to the VBML JSON document")
    parser.add_argument("--rows", type=int, help="Board rows (defaults to the document style, then 6)")
    parser.add_argument("--cols", type=int, help="Board columns (defaults to the document style, then 22)")
    parser.add_argument("--output", help="Directory to write board.txt, board.json and debug artifacts")
    parser.add_argument("--lenient", action="store_true", help="Crop absolute components instead of failing")
    parser.add_argument("--strict-warnings", action="store_true", help="Exit non-zero when warnings are reported")
    args = parser.parse_args(argv)

    vbml_path = Path(args.vbml_file).resolve()
    if not vbml_path.exists():
        raise FileNotFoundError(f"VBML file not found: {vbml_path}")

    defaults = StyleDefaults(strict_bounds=not args.lenient)
    LOGGER.info("Rendering %s", vbml_path.name)
    result = render_document(load_document(vbml_path), args.rows, args.cols, defaults=defaults)

    if not result.ok:
        LOGGER.error("Render failed: %s", result.error)
        return 1

    canvas = result.unwrap()
    LOGGER.info("Rendered %dx%d board with %d warning(s)", canvas.rows, canvas.cols, len(result.warnings))
    sys.stdout.write(format_board(canvas))
    for warning in result.warnings:
        sys.stdout.write(f"warning: {warning}\n")

    if args.output:
        output_path = Path(args.output).resolve()
        LOGGER.info("Writing outputs into %s", output_path)
        write_outputs(result, output_path)

    if args.strict_warnings and result.warnings:
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
