"""Tests for painting layout boxes onto a canvas."""
import unittest

from vbml_renderer.model.elements import LayoutBox, Rect, RenderedBlock
from vbml_renderer.model.errors import ErrorKind
from vbml_renderer.renderer.compositor import Compositor


def box(index: int, x: int, y: int, rows) -> LayoutBox:
    height, width = len(rows), len(rows[0])
    block = RenderedBlock(width=width, height=height, rows=[list(row) for row in rows])
    return LayoutBox(component_index=index, element_type="raw", rect=Rect(x, y, width, height), block=block)


class CompositorTest(unittest.TestCase):
    """Document-order painting with clipping."""

    def test_blocks_are_copied_to_their_rectangles(self) -> None:
        canvas, warnings = Compositor(2, 4).compose([box(0, 1, 1, [[1, 2]])])

        self.assertEqual(canvas.to_list(), [[0, 0, 0, 0], [0, 1, 2, 0]])
        self.assertEqual(warnings, [])
        self.assertTrue(canvas.frozen)

    def test_later_boxes_overwrite_earlier_ones(self) -> None:
        boxes = [box(0, 0, 0, [[1, 1, 1]]), box(1, 1, 0, [[2, 0]])]
        canvas, _ = Compositor(1, 3).compose(boxes)

        self.assertEqual(canvas.to_list(), [[1, 2, 0]])

    def test_partially_visible_box_is_clipped(self) -> None:
        canvas, warnings = Compositor(2, 3).compose([box(0, 2, 1, [[1, 2], [3, 4]])])

        self.assertEqual(canvas.to_list(), [[0, 0, 0], [0, 0, 1]])
        self.assertEqual(warnings, [])

    def test_box_wholly_off_canvas_warns(self) -> None:
        canvas, warnings = Compositor(2, 3).compose([box(0, 0, 0, [[5]]), box(1, 3, 0, [[1]])])

        self.assertEqual(canvas.to_list(), [[5, 0, 0], [0, 0, 0]])
        self.assertEqual(len(warnings), 1)
        self.assertEqual(warnings[0].kind, ErrorKind.COMPONENT_OFF_CANVAS)
        self.assertEqual(warnings[0].component_index, 1)

    def test_empty_layout_gives_blank_canvas(self) -> None:
        canvas, warnings = Compositor(6, 22).compose([])

        self.assertEqual(canvas.to_list(), [[0] * 22 for _ in range(6)])
        self.assertEqual(warnings, [])


if __name__ == "__main__":
    unittest.main()
