"""Style defaults and the override merge used to resolve component styles."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from vbml_renderer.model.elements import AbsolutePosition, Align, BoardStyle, ComponentStyle, Justify

FLAGSHIP_ROWS = 6
FLAGSHIP_COLS = 22

# Only these fields flow from the engine and the board down to components.
INHERITED_FIELDS = ("justify", "align")


@dataclass(frozen=True, slots=True)
class StyleDefaults:
    """Engine built-in configuration."""

    rows: int = FLAGSHIP_ROWS
    cols: int = FLAGSHIP_COLS
    justify: Justify = Justify.LEFT
    align: Align = Align.TOP
    strict_bounds: bool = True


ENGINE_DEFAULTS = StyleDefaults()


@dataclass(frozen=True, slots=True)
class ResolvedStyle:
    """Component style after inheritance; justify and align are always set."""

    justify: Justify
    align: Align
    width: Optional[int] = None
    height: Optional[Union[int, str]] = None
    absolute_position: Optional[AbsolutePosition] = None

    @property
    def is_absolute(self) -> bool:
        return self.absolute_position is not None


def _as_layer(layer: Any) -> Dict[str, Any]:
    if layer is None:
        return {}
    if isinstance(layer, Mapping):
        return dict(layer)
    return {f.name: getattr(layer, f.name) for f in fields(layer)}


def merge_style_layers(*layers: Any, keys: Optional[Tuple[str, ...]] = None) -> Dict[str, Any]:
    """Merge style layers from lowest to highest precedence.

    Each layer is a dataclass, a mapping or ``None``. A later layer overrides
    an earlier one only where its value is not ``None``. When ``keys`` is
    given, only those fields are considered.
    """
    merged: Dict[str, Any] = {}
    for layer in layers:
        for key, value in _as_layer(layer).items():
            if keys is not None and key not in keys:
                continue
            if value is not None:
                merged[key] = value
            else:
                merged.setdefault(key, None)
    return merged


class StyleResolver:
    """Resolve component styles against board and engine defaults."""

    def __init__(self, board_style: Optional[BoardStyle] = None, defaults: StyleDefaults = ENGINE_DEFAULTS) -> None:
        self._board = board_style or BoardStyle()
        self._defaults = defaults

    @property
    def defaults(self) -> StyleDefaults:
        return self._defaults

    def resolve(self, style: Optional[ComponentStyle]) -> ResolvedStyle:
        """Apply engine defaults, then board style, then the component's own style."""
        style = style or ComponentStyle()
        inherited = merge_style_layers(self._defaults, self._board, style, keys=INHERITED_FIELDS)
        return ResolvedStyle(
            justify=Justify(inherited["justify"]),
            align=Align(inherited["align"]),
            width=style.width,
            height=style.height,
            absolute_position=style.absolute_position,
        )

    def canvas_size(self, rows: Optional[int] = None, cols: Optional[int] = None) -> Tuple[int, int]:
        """Return ``(rows, cols)``: explicit arguments, then board style, then defaults."""
        size = merge_style_layers(
            {"height": self._defaults.rows, "width": self._defaults.cols},
            {"height": self._board.height, "width": self._board.width},
            {"height": rows, "width": cols},
        )
        resolved_rows, resolved_cols = int(size["height"]), int(size["width"])
        if resolved_rows <= 0 or resolved_cols <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {resolved_rows}x{resolved_cols}")
        return resolved_rows, resolved_cols
