"""Fixed-size grid of glyph codes produced by a render."""
from __future__ import annotations

import json
import re
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from vbml_renderer.model.errors import CanvasIndexError, InvalidCodeError
from vbml_renderer.model.glyph_table import BLANK, decode, is_valid_code
from vbml_renderer.model.style_model import FLAGSHIP_COLS, FLAGSHIP_ROWS

_NON_BOARD_CHARS = re.compile(r"[^0-9,]")


class Canvas:
    """Row-major ``rows`` x ``cols`` grid of glyph codes, blank on creation."""

    __slots__ = ("rows", "cols", "_cells", "_frozen")

    def __init__(self, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: List[List[int]] = [[BLANK] * cols for _ in range(rows)]
        self._frozen = False

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_list(cls, grid: Sequence[Sequence[int]]) -> "Canvas":
        """Build a canvas from a row-major list of equally sized rows."""
        if not grid or not grid[0]:
            raise ValueError("Canvas grid must have at least one row and one column")
        cols = len(grid[0])
        canvas = cls(len(grid), cols)
        for row_index, row in enumerate(grid):
            if len(row) != cols:
                raise ValueError(f"Row {row_index} has {len(row)} cells, expected {cols}")
            for col_index, code in enumerate(row):
                canvas.set(row_index, col_index, code)
        return canvas

    @classmethod
    def parse(cls, text: str, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS) -> "Canvas":
        """Decode a stringified board such as ``"[[0,1,2],[3,4,5]]"``.

        Everything except digits and commas is ignored and the values are
        read in row-major order. Missing trailing cells stay blank.
        """
        canvas = cls(rows, cols)
        values = [value for value in _NON_BOARD_CHARS.sub("", text).split(",") if value]
        if len(values) > rows * cols:
            raise ValueError(f"Board text holds {len(values)} cells, a {rows}x{cols} canvas holds {rows * cols}")
        for index, value in enumerate(values):
            canvas.set(index // cols, index % cols, int(value))
        return canvas

    # ------------------------------------------------------------------
    # Cell access
    def get(self, row: int, col: int) -> int:
        self._check_index(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, code: int) -> None:
        if self._frozen:
            raise TypeError("Canvas is frozen and can no longer be modified")
        self._check_index(row, col)
        self._cells[row][col] = code

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def freeze(self) -> "Canvas":
        """Reject further writes; returns ``self`` for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def row(self, index: int) -> List[int]:
        if not 0 <= index < self.rows:
            raise CanvasIndexError(index, 0, self.rows, self.cols)
        return list(self._cells[index])

    def __iter__(self) -> Iterator[List[int]]:
        return (list(row) for row in self._cells)

    # ------------------------------------------------------------------
    # Validation and comparison
    def validate(self) -> None:
        """Raise ``InvalidCodeError`` for the first cell outside the code range."""
        for row_index, row in enumerate(self._cells):
            for col_index, code in enumerate(row):
                if not is_valid_code(code):
                    raise InvalidCodeError(code, f"cell ({row_index}, {col_index}) holds invalid glyph code {code!r}")

    def diff(self, other: "Canvas") -> Set[Tuple[int, int]]:
        """Return the ``(row, col)`` cells whose codes differ from ``other``."""
        if self.shape != other.shape:
            raise ValueError(f"Cannot diff a {self.rows}x{self.cols} canvas against {other.rows}x{other.cols}")
        return {
            (row_index, col_index)
            for row_index, (mine, theirs) in enumerate(zip(self._cells, other._cells))
            for col_index, (left, right) in enumerate(zip(mine, theirs))
            if left != right
        }

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Canvas):
            return self._cells == other._cells
        if isinstance(other, (list, tuple)):
            return self._cells == [list(row) for row in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Canvas(rows={self.rows}, cols={self.cols})"

    # ------------------------------------------------------------------
    # Export
    def to_list(self) -> List[List[int]]:
        """Row-major copy of the grid, the wire format consumed by senders."""
        return [list(row) for row in self._cells]

    def to_json(self) -> str:
        return json.dumps(self._cells, separators=(",", ":"))

    def to_text(self, unknown: str = " ") -> str:
        """Best-effort decode of the grid, one line per row."""
        return "\n".join("".join(self._decode_row(row, unknown)) for row in self._cells)

    @staticmethod
    def _decode_row(row: Iterable[int], unknown: str) -> Iterator[str]:
        for code in row:
            char: Optional[str] = decode(code)
            yield unknown if char is None else char

    def _check_index(self, row: int, col: int) -> None:
        if not self.contains(row, col):
            raise CanvasIndexError(row, col, self.rows, self.cols)
