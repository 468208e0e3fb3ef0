"""Justified (row-filling) layout.

This module is intentionally UI-framework agnostic.

Goal: given a known container width and a sequence of items described only
by their aspect ratio, split them into rows whose items span the container
width exactly while each row's height stays close to a target height.

UI layers consume ``ComputedLayout.boxes`` and position their widgets with
the resulting ``top/left/width/height``.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from app.justified.layout.config import LayoutConfig
from app.justified.layout.errors import InvalidInput
from app.justified.layout.item import LayoutItem
from app.justified.layout.row import RejectedCarryOver, Row

logger = logging.getLogger(__name__)


@dataclass
class ComputedLayout:
    height: float
    widow_count: int
    boxes: List[LayoutItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "containerHeight": self.height,
            "widowCount": self.widow_count,
            "boxes": [item.geometry() for item in self.boxes],
        }


class JustifiedLayout:
    """Computes a layout for one item sequence at a time.

    Each ``compute_layout`` call resets ``container_height``, ``rows`` and
    ``layout_items``, so an instance can be reused but not shared between
    threads.
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config if config is not None else LayoutConfig()
        self.container_height = self.config.container_padding.top
        self.rows: List[Row] = []
        self.layout_items: List[LayoutItem] = []
        self._store: List[LayoutItem] = []
        self._current_row: Optional[Row] = None

    def _reset(self) -> None:
        self.container_height = self.config.container_padding.top
        self.rows = []
        self.layout_items = []
        self._store = []
        self._current_row = None
        self.config.widow_count = 0

    def create_row(self) -> Row:
        cadence = self.config.full_width_breakout_row_cadence
        is_breakout_row = bool(cadence) and (len(self.rows) + 1) % cadence == 0

        return Row(
            self._store,
            left=self.config.container_padding.left,
            top=self.container_height,
            width=self.config.row_width,
            spacing=self.config.box_spacing.horizontal,
            target_row_height=self.config.target_row_height,
            target_row_height_tolerance=self.config.target_row_height_tolerance,
            edge_case_min_row_height=0.5 * self.config.target_row_height,
            edge_case_max_row_height=2.0 * self.config.target_row_height,
            is_breakout_row=is_breakout_row,
            layout_style=self.config.widow_layout_style,
        )

    def push_row(self, row: Row) -> List[LayoutItem]:
        """Commit a completed row and return its items."""
        self.container_height += row.height + self.config.box_spacing.vertical
        self.rows.append(row)
        items = row.items
        self.layout_items.extend(items)
        logger.debug("committed row %d (%d items), container height now %s", len(self.rows), len(items), self.container_height)
        return items

    def _max_rows_reached(self) -> bool:
        return self.config.max_rows is not None and len(self.rows) >= self.config.max_rows

    def compute_layout_by_ratio(self, ratios: Iterable[float]) -> ComputedLayout:
        return self.compute_layout(LayoutItem.from_ratio(r) for r in ratios)

    def compute_layout(self, items: Iterable[LayoutItem]) -> ComputedLayout:
        """Lay out ``items`` in order and return the computed geometry.

        Input items are copied, never modified; ``boxes`` holds the copies.
        Raises InvalidConfig for a degenerate config and InvalidInput for an
        item whose aspect ratio is NaN, infinite or not positive.
        """
        self.config.validate()
        self._reset()

        force_ratio = self.config.force_aspect_ratio
        for index, item in enumerate(items):
            if force_ratio is not None:
                item = replace(item, force_aspect_ratio=force_ratio)
            else:
                item = replace(item)
            ratio = item.layout_aspect_ratio
            if not isinstance(ratio, (int, float)) or not math.isfinite(ratio) or ratio <= 0:
                raise InvalidInput(index, ratio)
            self._store.append(item)

        for index in range(len(self._store)):
            if not self._place(index):
                logger.debug("max_rows=%s reached; stopping", self.config.max_rows)
                break

        row = self._current_row
        self._current_row = None
        if row is not None and len(row) > 0 and self.config.show_widows:
            self._lay_out_widows(row)

        if self.rows:
            self.container_height -= self.config.box_spacing.vertical
        self.container_height += self.config.container_padding.bottom

        return ComputedLayout(
            height=self.container_height,
            widow_count=self.config.widow_count,
            boxes=list(self.layout_items),
        )

    def _place(self, index: int) -> bool:
        """Feed one item to the pending row. Returns False once max_rows is reached."""
        pending: Optional[int] = index
        while pending is not None:
            if self._current_row is None:
                self._current_row = self.create_row()

            row = self._current_row
            result = row.add(pending)
            # A rejected item opens the next row.
            pending = result.index if isinstance(result, RejectedCarryOver) else None
            if not row.is_layout_complete():
                continue

            self.push_row(row)
            self._current_row = None
            if self._max_rows_reached():
                return False
        return True

    def _lay_out_widows(self, row: Row) -> None:
        if self.rows:
            last_row = self.rows[-1]
            # Breakout rows are full width, so their height says nothing about the grid.
            if last_row.is_breakout_row:
                reference_height = last_row.target_row_height
            else:
                reference_height = last_row.height
            row.force_complete(False, reference_height)
        else:
            row.force_complete(False, None)

        self.config.widow_count = len(row)
        logger.debug("laid out %d widow(s) at height %s", len(row), row.height)
        self.push_row(row)


ItemInput = Union[float, int, Sequence[float], Mapping[str, Any], LayoutItem]


def _to_item(value: ItemInput) -> LayoutItem:
    if isinstance(value, LayoutItem):
        return value
    if isinstance(value, Mapping):
        if "aspect_ratio" in value or "aspectRatio" in value:
            return LayoutItem.from_ratio(value.get("aspect_ratio", value.get("aspectRatio")))
        return LayoutItem.from_size(value["width"], value["height"])
    if isinstance(value, (int, float)):
        return LayoutItem.from_ratio(value)
    width, height = value
    return LayoutItem.from_size(width, height)


def compute_justified_layout(
    inputs: Iterable[ItemInput],
    config: Optional[LayoutConfig] = None,
    **options: Any,
) -> ComputedLayout:
    """Compute a justified layout in one call.

    inputs may mix aspect ratios, ``(width, height)`` pairs, ``{"width",
    "height"}`` mappings and ``LayoutItem`` instances. Keyword options
    (camelCase or snake_case) override fields of ``config``, which is copied
    and left untouched.
    """
    base = copy.deepcopy(config) if config is not None else LayoutConfig()
    if options:
        base = replace(base, **LayoutConfig.normalize_options(options))

    return JustifiedLayout(base).compute_layout(_to_item(v) for v in inputs)
