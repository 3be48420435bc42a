"""Tests for board writers, debug dumps and the command line entry point."""
import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from vbml_renderer.main import main, render_document
from vbml_renderer.model.canvas import Canvas
from vbml_renderer.model.elements import ComponentStyle, Document, TemplateComponent
from vbml_renderer.renderer.board_renderer import JsonRenderer, TextRenderer
from vbml_renderer.renderer.utils import format_board, format_cell
from vbml_renderer.utils.debug import DebugDumper


class FormatBoardTest(unittest.TestCase):
    """Bordered text picture of a canvas."""

    def test_cells_are_two_columns_wide(self) -> None:
        self.assertEqual(format_cell(1), "A ")
        self.assertEqual(format_cell(0), "  ")
        self.assertEqual(format_cell(63), "🟥")

    def test_board_has_border(self) -> None:
        text = format_board(Canvas.from_list([[8, 9, 0]]))
        self.assertEqual(text, " ------\n|H I   |\n ------\n")

    def test_one_line_per_row(self) -> None:
        lines = format_board(Canvas()).splitlines()
        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[0], " " + "-" * 44)


class WriterTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.directory = Path(self._tmp.name)
        self.canvas = Canvas.from_list([[1, 2], [63, 0]])

    def test_text_renderer(self) -> None:
        target = self.directory / "board.txt"
        TextRenderer(target).render(self.canvas)
        self.assertEqual(target.read_text(encoding="utf-8"), format_board(self.canvas))

    def test_json_renderer(self) -> None:
        target = self.directory / "board.json"
        JsonRenderer(target).render(self.canvas)
        self.assertEqual(json.loads(target.read_text(encoding="utf-8")), [[1, 2], [63, 0]])

    def test_debug_dump(self) -> None:
        document = Document(components=[TemplateComponent("A B C", style=ComponentStyle(width=1, height=2))])
        result = render_document(document, rows=2, cols=1)
        target = DebugDumper(self.directory / "debug").dump(result)

        payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["canvas"], [[1], [2]])
        self.assertIsNone(payload["error"])
        self.assertEqual(payload["warnings"][0]["kind"], "ContentOverflow")
        self.assertEqual(payload["boxes"][0]["rect"], {"x": 0, "y": 0, "width": 1, "height": 2})

    def test_debug_dump_of_failure(self) -> None:
        result = render_document(Document(components=[TemplateComponent("{{who}}")]))
        payload = DebugDumper(self.directory).serialize(result)

        self.assertFalse(payload["ok"])
        self.assertIsNone(payload["canvas"])
        self.assertEqual(payload["error"]["kind"], "MissingProp")
        self.assertEqual(payload["error"]["component"], 0)


class CommandLineTest(unittest.TestCase):
    """Exit codes and outputs of ``main``."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.directory = Path(self._tmp.name)

    def _write(self, payload: dict) -> str:
        path = self.directory / "input.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    def _run(self, argv) -> tuple:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(argv)
        return code, buffer.getvalue()

    def test_renders_board_and_writes_outputs(self) -> None:
        path = self._write({"components": [{"template": "HI"}]})
        output = self.directory / "out"
        code, stdout = self._run([path, "--rows", "1", "--cols", "2", "--output", str(output)])

        self.assertEqual(code, 0)
        self.assertIn("|H I |", stdout)
        self.assertEqual(json.loads((output / "board.json").read_text(encoding="utf-8")), [[8, 9]])
        self.assertTrue((output / "board.txt").exists())
        self.assertTrue((output / "debug" / "render_result.json").exists())

    def test_strict_warnings_exit_code(self) -> None:
        path = self._write({"components": [{"template": "A B", "style": {"width": 1, "height": 1}}]})

        code, stdout = self._run([path])
        self.assertEqual(code, 0)
        self.assertIn("warning: ContentOverflow", stdout)

        code, _ = self._run([path, "--strict-warnings"])
        self.assertEqual(code, 2)

    def test_fatal_error_exit_code(self) -> None:
        path = self._write({"components": [{"template": "{{missing}}"}]})
        code, stdout = self._run([path])

        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")

    def test_lenient_flag(self) -> None:
        path = self._write(
            {"components": [{"template": "ABC", "style": {"width": 3, "height": 1, "absolutePosition": {"x": 1, "y": 0}}}]}
        )
        self.assertEqual(self._run([path, "--cols", "2", "--rows", "1"])[0], 1)
        code, stdout = self._run([path, "--cols", "2", "--rows", "1", "--lenient"])
        self.assertEqual(code, 0)
        self.assertIn("|  A |", stdout)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            main([str(self.directory / "nope.json")])


if __name__ == "__main__":
    unittest.main()
