"""Errors raised while computing a justified layout."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for layout errors."""


class InvalidConfig(LayoutError):
    """Configuration that cannot produce a layout (zero width, zero target height, ...)."""


class InvalidInput(LayoutError):
    """An input item whose aspect ratio is unusable."""

    def __init__(self, index: int, value: object) -> None:
        self.index = index
        self.value = value
        super().__init__(f"item {index} has an invalid aspect ratio: {value!r}")
