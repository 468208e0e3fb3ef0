"""Row packing for justified layouts.

A row collects items until their summed aspect ratio lands inside the
tolerance band around ``width / target_row_height``, then resolves the row
height and writes pixel geometry back into the items.

Rows do not own items: they hold indices into a list owned by the caller
(the item list a ``JustifiedLayout`` builds for each run).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from app.justified.layout.config import WidowLayoutStyle
from app.justified.layout.item import LayoutItem
from app.justified.utils.rounding import round_half_away

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accepted:
    """The item is part of the row (the row may or may not be complete)."""

    index: int


@dataclass(frozen=True)
class RejectedCarryOver:
    """The row completed without the item; offer it to the next row."""

    index: int


AddResult = Union[Accepted, RejectedCarryOver]


@dataclass
class Row:
    store: List[LayoutItem] = field(repr=False)
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    spacing: float = 0.0
    target_row_height: float = 320.0
    target_row_height_tolerance: float = 0.25
    edge_case_min_row_height: Optional[float] = None
    edge_case_max_row_height: Optional[float] = None
    is_breakout_row: bool = False
    layout_style: WidowLayoutStyle = WidowLayoutStyle.LEFT
    indices: List[int] = field(default_factory=list)
    height: float = 0.0
    min_aspect_ratio: float = field(init=False, default=0.0)
    max_aspect_ratio: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        base = self.width / self.target_row_height
        self.min_aspect_ratio = base * (1.0 - self.target_row_height_tolerance)
        self.max_aspect_ratio = base * (1.0 + self.target_row_height_tolerance)
        if self.edge_case_min_row_height is None:
            self.edge_case_min_row_height = 0.5 * self.target_row_height
        if self.edge_case_max_row_height is None:
            self.edge_case_max_row_height = 2.0 * self.target_row_height

    @property
    def items(self) -> List[LayoutItem]:
        return [self.store[i] for i in self.indices]

    def __len__(self) -> int:
        return len(self.indices)

    def is_layout_complete(self) -> bool:
        return self.height > 0

    def add(self, index: int) -> AddResult:
        """Offer ``store[index]`` to this row.

        Returns ``Accepted`` when the item joined the row, or
        ``RejectedCarryOver`` when the row finalized on its previous items
        and the item must start the next row.
        """
        if self.is_layout_complete():
            raise RuntimeError("cannot add to a row whose layout is complete")

        candidate = self.store[index].layout_aspect_ratio
        count = len(self.indices)
        row_width_without_spacing = self.width - count * self.spacing

        if self.is_breakout_row and count == 0 and candidate >= 1.0:
            self.indices.append(index)
            self.complete_layout(row_width_without_spacing / candidate, WidowLayoutStyle.JUSTIFY)
            return Accepted(index)

        new_aspect_ratio = candidate + self.aspect_ratio_sum()
        target_aspect_ratio = row_width_without_spacing / self.target_row_height

        if new_aspect_ratio < self.min_aspect_ratio:
            self.indices.append(index)
            return Accepted(index)

        if new_aspect_ratio > self.max_aspect_ratio:
            if count == 0:
                # A single item wider than the band gets a row of its own.
                self.indices.append(index)
                self.complete_layout(row_width_without_spacing / new_aspect_ratio, WidowLayoutStyle.JUSTIFY)
                return Accepted(index)

            previous_row_width_without_spacing = self._row_width_without_spacing()
            previous_aspect_ratio = self.aspect_ratio_sum()
            previous_target_aspect_ratio = previous_row_width_without_spacing / self.target_row_height

            if abs(new_aspect_ratio - target_aspect_ratio) > abs(previous_aspect_ratio - previous_target_aspect_ratio):
                self.complete_layout(
                    previous_row_width_without_spacing / previous_aspect_ratio,
                    WidowLayoutStyle.JUSTIFY,
                )
                return RejectedCarryOver(index)

        self.indices.append(index)
        self.complete_layout(row_width_without_spacing / new_aspect_ratio, WidowLayoutStyle.JUSTIFY)
        return Accepted(index)

    def aspect_ratio_sum(self) -> float:
        total = 0.0
        for i in self.indices:
            total += self.store[i].layout_aspect_ratio
        return total

    def _row_width_without_spacing(self) -> float:
        return self.width - (len(self.indices) - 1) * self.spacing

    def complete_layout(self, new_height: float, layout_style: Optional[WidowLayoutStyle] = None) -> None:
        """Finalize the row at ``new_height`` and write item geometry.

        The height is rounded and clamped to the edge-case bounds. With
        Justify, per-item rounding error is spread so the last item ends
        exactly at ``left + width``.
        """
        if not self.indices:
            raise RuntimeError("cannot lay out an empty row")

        style = WidowLayoutStyle.parse(self.layout_style if layout_style is None else layout_style)
        row_width_without_spacing = self._row_width_without_spacing()

        rounded_height = round_half_away(new_height)
        clamped_height = max(self.edge_case_min_row_height, min(rounded_height, self.edge_case_max_row_height))

        if rounded_height != clamped_height:
            self.height = clamped_height
            if rounded_height == 0:
                clamp_ratio = 0.0
            else:
                clamp_ratio = (row_width_without_spacing / clamped_height) / (row_width_without_spacing / rounded_height)
        else:
            self.height = rounded_height
            clamp_ratio = 1.0

        items = self.items
        item_width_sum = self.left
        for item in items:
            item.top = self.top
            item.height = self.height
            item.width = round_half_away(item.layout_aspect_ratio * self.height * clamp_ratio)
            item.left = item_width_sum
            item_width_sum += item.width + self.spacing

        # Width actually consumed by items and the gaps between them.
        consumed = item_width_sum - self.spacing - self.left

        if style is WidowLayoutStyle.JUSTIFY:
            error_per_item = (consumed - self.width) / len(items)
            if len(items) == 1:
                items[0].width -= round_half_away(error_per_item)
            else:
                cumulative = [round_half_away((i + 1) * error_per_item) for i in range(len(items))]
                items[0].width -= cumulative[0]
                for i in range(1, len(items)):
                    items[i].left -= cumulative[i - 1]
                    items[i].width -= cumulative[i] - cumulative[i - 1]
        elif style is WidowLayoutStyle.CENTER:
            # item_width_sum still counts the left offset and a trailing gap.
            offset = (self.width - item_width_sum) / 2 + self.spacing
            for item in items:
                item.left += offset

        logger.debug(
            "row at top=%s complete: %d items, height=%s, style=%s",
            self.top,
            len(items),
            self.height,
            style.value,
        )

    def force_complete(self, fit_to_width: bool = False, row_height: Optional[float] = None) -> None:
        """Finalize a partial (widow) row.

        An explicit ``row_height`` wins; otherwise ``fit_to_width`` stretches
        the row across the container, else the target height is used.
        """
        if row_height is not None:
            self.complete_layout(row_height)
        elif fit_to_width:
            self.complete_layout(self._row_width_without_spacing() / self.aspect_ratio_sum(), WidowLayoutStyle.JUSTIFY)
        else:
            self.complete_layout(self.target_row_height)
