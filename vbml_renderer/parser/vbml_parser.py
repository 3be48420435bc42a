"""Decode VBML JSON payloads into the document model."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from vbml_renderer.model.elements import (
    AUTO,
    AbsolutePosition,
    Align,
    BoardStyle,
    Component,
    ComponentStyle,
    Document,
    Justify,
    PropValue,
    RawComponent,
    TemplateComponent,
)
from vbml_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class VbmlFormatError(ValueError):
    """Raised when a VBML payload does not match the expected structure."""


class VbmlParser:
    """Turn a decoded VBML mapping into a ``Document``."""

    def __init__(self, payload: Mapping[str, Any]) -> None:
        if not isinstance(payload, Mapping):
            raise VbmlFormatError("VBML payload must be a JSON object")
        self._payload = payload

    def parse(self) -> Document:
        """Parse props, board style and components."""
        props = self._parse_props(self._payload.get("props"), "props")
        style = self._parse_board_style(self._payload.get("style"))
        raw_components = self._payload.get("components", [])
        if not isinstance(raw_components, list):
            raise VbmlFormatError("'components' must be a list")

        components = [self._parse_component(entry, index) for index, entry in enumerate(raw_components)]
        LOGGER.debug("Parsed VBML document with %d component(s)", len(components))
        return Document(components=components, props=props, style=style)

    # ------------------------------------------------------------------
    # Sections
    def _parse_props(self, value: Any, where: str) -> Dict[str, PropValue]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise VbmlFormatError(f"'{where}' must be an object")
        props: Dict[str, PropValue] = {}
        for key, item in value.items():
            if isinstance(item, bool) or not isinstance(item, (str, int)):
                raise VbmlFormatError(f"prop {key!r} must be a string or an integer glyph code")
            props[str(key)] = item
        return props

    def _parse_board_style(self, value: Any) -> BoardStyle:
        if value is None:
            return BoardStyle()
        if not isinstance(value, Mapping):
            raise VbmlFormatError("'style' must be an object")
        return BoardStyle(
            width=self._optional_int(value, "width", "style"),
            height=self._optional_int(value, "height", "style"),
            justify=self._optional_enum(value, "justify", Justify, "style"),
            align=self._optional_enum(value, "align", Align, "style"),
        )

    def _parse_component(self, entry: Any, index: int) -> Component:
        where = f"components[{index}]"
        if not isinstance(entry, Mapping):
            raise VbmlFormatError(f"{where} must be an object")

        has_template = "template" in entry
        has_raw = "rawCharacters" in entry
        if has_template == has_raw:
            raise VbmlFormatError(f"{where} must define exactly one of 'template' or 'rawCharacters'")

        style = self._parse_component_style(entry.get("style"), where)
        if has_raw:
            return RawComponent(raw_characters=self._parse_raw(entry["rawCharacters"], where), style=style)

        template = entry["template"]
        if not isinstance(template, str):
            raise VbmlFormatError(f"{where}.template must be a string")
        props = self._parse_props(entry.get("props"), f"{where}.props")
        return TemplateComponent(template=template, style=style, props=props)

    def _parse_component_style(self, value: Any, where: str) -> ComponentStyle:
        if value is None:
            return ComponentStyle()
        if not isinstance(value, Mapping):
            raise VbmlFormatError(f"{where}.style must be an object")

        height: Optional[Union[int, str]]
        if value.get("height") == AUTO:
            height = AUTO
        else:
            height = self._optional_int(value, "height", f"{where}.style")

        return ComponentStyle(
            width=self._optional_int(value, "width", f"{where}.style"),
            height=height,
            justify=self._optional_enum(value, "justify", Justify, f"{where}.style"),
            align=self._optional_enum(value, "align", Align, f"{where}.style"),
            absolute_position=self._parse_position(value.get("absolutePosition"), where),
        )

    def _parse_position(self, value: Any, where: str) -> Optional[AbsolutePosition]:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise VbmlFormatError(f"{where}.style.absolutePosition must be an object")
        x = self._optional_int(value, "x", f"{where}.style.absolutePosition")
        y = self._optional_int(value, "y", f"{where}.style.absolutePosition")
        if x is None or y is None:
            raise VbmlFormatError(f"{where}.style.absolutePosition requires both 'x' and 'y'")
        return AbsolutePosition(x=x, y=y)

    def _parse_raw(self, value: Any, where: str) -> List[List[int]]:
        if not isinstance(value, list) or not all(isinstance(row, list) for row in value):
            raise VbmlFormatError(f"{where}.rawCharacters must be a list of rows")
        grid: List[List[int]] = []
        for row_index, row in enumerate(value):
            for code in row:
                if isinstance(code, bool) or not isinstance(code, int):
                    raise VbmlFormatError(f"{where}.rawCharacters[{row_index}] holds non-integer value {code!r}")
            grid.append(list(row))
        return grid

    # ------------------------------------------------------------------
    # Scalars
    @staticmethod
    def _optional_int(value: Mapping[str, Any], key: str, where: str) -> Optional[int]:
        item = value.get(key)
        if item is None:
            return None
        if isinstance(item, bool) or not isinstance(item, int) or item < 0:
            raise VbmlFormatError(f"{where}.{key} must be a non-negative integer, got {item!r}")
        return item

    @staticmethod
    def _optional_enum(value: Mapping[str, Any], key: str, enum_type, where: str):
        item = value.get(key)
        if item is None:
            return None
        try:
            return enum_type(str(item).lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in enum_type)
            raise VbmlFormatError(f"{where}.{key} must be one of {allowed}, got {item!r}") from exc


def parse_vbml(text: str) -> Document:
    """Decode a VBML JSON string."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise VbmlFormatError(f"invalid VBML JSON: {exc}") from exc
    return VbmlParser(payload).parse()


def load_document(path: Path) -> Document:
    """Read and decode a VBML JSON file."""
    return parse_vbml(Path(path).read_text(encoding="utf-8"))
