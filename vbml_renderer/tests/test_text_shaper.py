"""Tests covering wrapping and horizontal justification."""
import unittest
from typing import List

from vbml_renderer.model.elements import Justify
from vbml_renderer.parser.template_parser import TemplateParser
from vbml_renderer.parser.text_shaper import TextShaper


def shape(template: str, width: int, justify: Justify = Justify.LEFT) -> List[List[int]]:
    tokens = TemplateParser().tokenize(template)
    return TextShaper(width, justify).shape(tokens)


class WrappingTest(unittest.TestCase):
    """Line breaking at word boundaries and hard splits."""

    def test_fits_on_one_line(self) -> None:
        self.assertEqual(shape("hi", 2), [[8, 9]])

    def test_wraps_whole_words(self) -> None:
        self.assertEqual(shape("AB CD EF", 5), [[1, 2, 0, 3, 4], [5, 6, 0, 0, 0]])

    def test_hard_splits_long_word(self) -> None:
        self.assertEqual(shape("ABCDEFG", 3), [[1, 2, 3], [4, 5, 6], [7, 0, 0]])

    def test_long_word_starts_on_fresh_line(self) -> None:
        self.assertEqual(shape("A BCDEF", 3), [[1, 0, 0], [2, 3, 4], [5, 6, 0]])

    def test_explicit_newlines_force_breaks(self) -> None:
        self.assertEqual(shape("A\n\nB", 2), [[1, 0], [0, 0], [2, 0]])

    def test_spaces_at_wrap_point_are_trimmed(self) -> None:
        self.assertEqual(shape("AB   CD", 3), [[1, 2, 0], [3, 4, 0]])

    def test_trailing_spaces_are_dropped(self) -> None:
        self.assertEqual(shape("AB  ", 4, Justify.RIGHT), [[0, 0, 1, 2]])

    def test_leading_spaces_are_kept(self) -> None:
        self.assertEqual(shape(" AB", 4), [[0, 1, 2, 0]])

    def test_inner_spacing_is_kept(self) -> None:
        self.assertEqual(shape("A  B", 5), [[1, 0, 0, 2, 0]])

    def test_explicit_blank_code_does_not_break_words(self) -> None:
        self.assertEqual(shape("A{0}B CD", 3), [[1, 0, 2], [3, 4, 0]])

    def test_empty_input_and_zero_width(self) -> None:
        self.assertEqual(shape("", 4), [])
        self.assertEqual(shape("AB", 0), [])

    def test_negative_width_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TextShaper(-1)


class JustificationTest(unittest.TestCase):
    """Padding and stretching rules for each justify mode."""

    def test_left_and_none(self) -> None:
        self.assertEqual(shape("AB", 4, Justify.LEFT), [[1, 2, 0, 0]])
        self.assertEqual(shape("AB", 4, Justify.NONE), [[1, 2, 0, 0]])

    def test_right(self) -> None:
        self.assertEqual(shape("AB", 4, Justify.RIGHT), [[0, 0, 1, 2]])

    def test_center_odd_remainder_goes_right(self) -> None:
        self.assertEqual(shape("AB", 5, Justify.CENTER), [[0, 1, 2, 0, 0]])
        self.assertEqual(shape("A", 4, Justify.CENTER), [[0, 1, 0, 0]])

    def test_center_even_remainder(self) -> None:
        self.assertEqual(shape("AB", 6, Justify.CENTER), [[0, 0, 1, 2, 0, 0]])

    def test_justified_even_spread(self) -> None:
        self.assertEqual(shape("A B C", 7, Justify.JUSTIFIED), [[1, 0, 0, 2, 0, 0, 3]])

    def test_justified_extra_space_starts_leftmost(self) -> None:
        self.assertEqual(shape("A B C", 8, Justify.JUSTIFIED), [[1, 0, 0, 0, 2, 0, 0, 3]])
        self.assertEqual(shape("A B C D", 9, Justify.JUSTIFIED), [[1, 0, 0, 2, 0, 0, 3, 0, 4]])

    def test_justified_single_word_is_left_aligned(self) -> None:
        self.assertEqual(shape("AB", 4, Justify.JUSTIFIED), [[1, 2, 0, 0]])

    def test_justified_applies_per_wrapped_line(self) -> None:
        self.assertEqual(
            shape("AA BB CC", 6, Justify.JUSTIFIED),
            [[1, 1, 0, 0, 2, 2], [3, 3, 0, 0, 0, 0]],
        )

    def test_every_row_matches_width(self) -> None:
        text = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG\nAND SLEEPS"
        for justify in Justify:
            for width in (1, 4, 7, 22):
                for row in shape(text, width, justify):
                    self.assertEqual(len(row), width, f"{justify} at width {width}")

    def test_justified_rows_have_no_trailing_gap(self) -> None:
        rows = shape("ONE TWO THREE FOUR FIVE SIX", 11, Justify.JUSTIFIED)
        self.assertEqual(len(rows), 3)
        for row in rows:
            word_count = sum(1 for i, code in enumerate(row) if code and (i == 0 or row[i - 1] == 0))
            self.assertGreaterEqual(word_count, 2)
            self.assertNotEqual(row[0], 0)
            self.assertNotEqual(row[-1], 0)


if __name__ == "__main__":
    unittest.main()
