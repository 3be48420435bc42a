"""Helpers to persist render results for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from vbml_renderer.model.canvas import Canvas
from vbml_renderer.model.errors import RenderError
from vbml_renderer.model.render_model import RenderResult


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, result: RenderResult) -> Path:
        """Persist the render result as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "render_result.json"
        target.write_text(json.dumps(self.serialize(result), indent=2), encoding="utf-8")
        return target

    def serialize(self, value: Any) -> Any:
        if isinstance(value, RenderResult):
            return {
                "ok": value.ok,
                "canvas": self.serialize(value.canvas),
                "error": self.serialize(value.error),
                "warnings": [self.serialize(warning) for warning in value.warnings],
                "boxes": [self.serialize(box) for box in value.boxes],
            }
        if isinstance(value, Canvas):
            return value.to_list()
        if isinstance(value, RenderError):
            return {"kind": value.kind.value, "message": value.message, "component": value.component_index}
        if isinstance(value, Enum):
            return value.value
        if is_dataclass(value):
            return {k: self.serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, dict):
            return {k: self.serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.serialize(v) for v in value]
        return value
