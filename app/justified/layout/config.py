"""Layout configuration.

Plain dataclasses with the defaults of the classic justified photo grid
(1060px container, 320px rows, 25% tolerance). ``from_mapping`` accepts the
camelCase option names used by JSON callers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Optional, Union

from app.justified.layout.errors import InvalidConfig


class WidowLayoutStyle(str, Enum):
    LEFT = "left"
    JUSTIFY = "justify"
    CENTER = "center"

    @classmethod
    def parse(cls, value: Union[str, "WidowLayoutStyle"]) -> "WidowLayoutStyle":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfig(f"unknown widow layout style: {value!r}") from None


@dataclass
class Padding:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        v = float(value)
        return cls(left=v, right=v, top=v, bottom=v)


@dataclass
class Spacing:
    horizontal: float = 0.0
    vertical: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Spacing":
        v = float(value)
        return cls(horizontal=v, vertical=v)


@dataclass
class LayoutConfig:
    container_width: float = 1060
    container_padding: Padding = field(default_factory=lambda: Padding.uniform(10))
    box_spacing: Spacing = field(default_factory=lambda: Spacing.uniform(10))
    target_row_height: float = 320.0
    target_row_height_tolerance: float = 0.25
    max_rows: Optional[int] = None
    force_aspect_ratio: Optional[float] = None
    show_widows: bool = True
    full_width_breakout_row_cadence: Optional[int] = None
    widow_layout_style: WidowLayoutStyle = WidowLayoutStyle.LEFT
    # Output: set by the layout to the number of items in the widow row.
    widow_count: int = 0

    @property
    def row_width(self) -> float:
        """Width available to a row once horizontal padding is removed."""
        return self.container_width - self.container_padding.left - self.container_padding.right

    def validate(self) -> None:
        """Reject configurations that would divide by zero or never fill a row."""

        if not _is_finite(self.container_width) or self.container_width <= 0:
            raise InvalidConfig("container_width must be > 0")
        if not _is_finite(self.target_row_height) or self.target_row_height <= 0:
            raise InvalidConfig("target_row_height must be > 0")
        if not _is_finite(self.target_row_height_tolerance) or self.target_row_height_tolerance < 0:
            raise InvalidConfig("target_row_height_tolerance must be >= 0")

        pad = self.container_padding
        for name in ("left", "right", "top", "bottom"):
            value = getattr(pad, name)
            if not _is_finite(value) or value < 0:
                raise InvalidConfig(f"container_padding.{name} must be >= 0")
        for name in ("horizontal", "vertical"):
            value = getattr(self.box_spacing, name)
            if not _is_finite(value) or value < 0:
                raise InvalidConfig(f"box_spacing.{name} must be >= 0")

        if self.row_width <= 0:
            raise InvalidConfig("container too narrow for given padding")
        if self.max_rows is not None and self.max_rows < 1:
            raise InvalidConfig("max_rows must be >= 1")
        if self.full_width_breakout_row_cadence is not None and self.full_width_breakout_row_cadence < 1:
            raise InvalidConfig("full_width_breakout_row_cadence must be >= 1")
        if self.force_aspect_ratio is not None and (
            not _is_finite(self.force_aspect_ratio) or self.force_aspect_ratio <= 0
        ):
            raise InvalidConfig("force_aspect_ratio must be > 0")

        self.widow_layout_style = WidowLayoutStyle.parse(self.widow_layout_style)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "LayoutConfig":
        """Build a config from camelCase (or snake_case) option names.

        ``containerPadding`` and ``boxSpacing`` accept a single number or a
        mapping of edges/axes; missing edges keep the default.
        """
        return cls(**cls.normalize_options(options))

    @classmethod
    def normalize_options(cls, options: Mapping[str, Any]) -> dict[str, Any]:
        """Map option names onto field names and coerce nested values."""
        known = {f.name for f in fields(cls)} - {"widow_count"}
        kwargs: dict[str, Any] = {}
        for raw_key, value in options.items():
            key = _OPTION_ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise InvalidConfig(f"unknown layout option: {raw_key!r}")
            kwargs[key] = value

        if "container_padding" in kwargs:
            kwargs["container_padding"] = _padding_from(kwargs["container_padding"])
        if "box_spacing" in kwargs:
            kwargs["box_spacing"] = _spacing_from(kwargs["box_spacing"])
        if "widow_layout_style" in kwargs:
            kwargs["widow_layout_style"] = WidowLayoutStyle.parse(kwargs["widow_layout_style"])
        return kwargs


_OPTION_ALIASES = {
    "containerWidth": "container_width",
    "containerPadding": "container_padding",
    "boxSpacing": "box_spacing",
    "targetRowHeight": "target_row_height",
    "targetRowHeightTolerance": "target_row_height_tolerance",
    "maxNumRows": "max_rows",
    "maxRows": "max_rows",
    "forceAspectRatio": "force_aspect_ratio",
    "showWidows": "show_widows",
    "fullWidthBreakoutRowCadence": "full_width_breakout_row_cadence",
    "widowLayoutStyle": "widow_layout_style",
}


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _padding_from(value: Any) -> Padding:
    if isinstance(value, Padding):
        return value
    if isinstance(value, Mapping):
        pad = Padding.uniform(10)
        for name, edge in value.items():
            if name not in ("left", "right", "top", "bottom"):
                raise InvalidConfig(f"unknown padding edge: {name!r}")
            setattr(pad, name, float(edge))
        return pad
    return Padding.uniform(value)


def _spacing_from(value: Any) -> Spacing:
    if isinstance(value, Spacing):
        return value
    if isinstance(value, Mapping):
        spacing = Spacing.uniform(10)
        for name, axis in value.items():
            if name not in ("horizontal", "vertical"):
                raise InvalidConfig(f"unknown spacing axis: {name!r}")
            setattr(spacing, name, float(axis))
        return spacing
    return Spacing.uniform(value)
