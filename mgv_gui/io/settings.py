"""Viewer settings persistence helpers."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

ALIGNMENT_POLICIES = ("5-prime", "3-prime", "proximal", "distal", "midpoint")


@dataclass
class ViewerSettings:
    """Geometry and navigation defaults shared by the region manager."""

    zoom_width: float = 1000.0
    end_cap_width: float = 12.0
    region_gap: float = 2.0
    min_region_width: float = 25.0
    border_min_width: float = 25.0
    default_window: int = 10_000_000
    feature_alignment: str = "5-prime"
    default_zoom: float = 2.0
    default_pan: float = 0.15

    def __post_init__(self) -> None:
        if self.feature_alignment not in ALIGNMENT_POLICIES:
            raise ValueError(f"Unknown feature alignment {self.feature_alignment!r}")
        if self.min_region_width <= 0 or self.border_min_width <= 0:
            raise ValueError("minimum region widths must be positive")
        if self.default_window < 1:
            raise ValueError("default_window must be at least 1 bp")
        if self.zoom_width <= self.end_cap_width:
            raise ValueError("zoom_width must be larger than the end cap")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ViewerSettings":
        known = {f.name for f in fields(cls)}
        defaults = cls()
        values: dict[str, Any] = {}
        for name in known:
            value = data.get(name, getattr(defaults, name))
            default = getattr(defaults, name)
            values[name] = type(default)(value)
        return cls(**values)


def save_settings(path: str | Path, settings: ViewerSettings) -> None:
    target = Path(path).expanduser()
    target.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")


def load_settings(path: str | Path) -> ViewerSettings:
    source = Path(path).expanduser()
    data = json.loads(source.read_text(encoding="utf-8"))
    return ViewerSettings.from_dict(data)
