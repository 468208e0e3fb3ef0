"""Layout items.

An item only knows its aspect ratio going in; the geometry fields are filled
in by the row that lays it out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class LayoutItem:
    """A box to place in the layout.

    aspect_ratio: width / height of the source media.
    force_aspect_ratio: when set, used instead of aspect_ratio for packing.
    """

    aspect_ratio: float
    force_aspect_ratio: Optional[float] = None
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_ratio(cls, aspect_ratio: float) -> "LayoutItem":
        return cls(aspect_ratio=float(aspect_ratio))

    @classmethod
    def from_size(cls, width: float, height: float) -> "LayoutItem":
        """Build an item from pixel dimensions (ratio = width / height)."""
        if height == 0:
            return cls(aspect_ratio=float("nan"))
        return cls(aspect_ratio=float(width) / float(height))

    @property
    def layout_aspect_ratio(self) -> float:
        if self.force_aspect_ratio is not None:
            return self.force_aspect_ratio
        return self.aspect_ratio

    def geometry(self) -> dict:
        return {
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "height": self.height,
        }
