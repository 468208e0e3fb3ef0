from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from app.justified.layout.config import LayoutConfig, Padding, Spacing, WidowLayoutStyle
from app.justified.layout.errors import LayoutError
from app.justified.layout.justified import ComputedLayout, compute_justified_layout

logger = logging.getLogger(__name__)


def parse_size(text: str) -> tuple[float, float]:
    """Parse ``"1920x1080"`` into ``(1920.0, 1080.0)``."""
    parts = text.lower().replace(":", "x").split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"size must look like 1920x1080, got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like 1920x1080, got {text!r}") from None


def load_input_file(path: str) -> tuple[list[Any], dict[str, Any]]:
    """Read items (and optional layout options) from a JSON file.

    Accepted shapes:
    - a list of items: ``[1.5, [1920, 1080], {"width": 800, "height": 600}]``
    - an object: ``{"items": [...], "options": {"containerWidth": 800}}``
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        return data, {}
    if isinstance(data, dict):
        return list(data.get("items", [])), dict(data.get("options", {}))
    raise ValueError(f"{path}: expected a JSON list or object")


def build_config(args: argparse.Namespace, file_options: Optional[dict[str, Any]] = None) -> LayoutConfig:
    """File options first, then explicit CLI flags on top."""
    config = LayoutConfig.from_mapping(file_options or {})
    if args.container_width is not None:
        config.container_width = args.container_width
    if args.padding is not None:
        config.container_padding = Padding.uniform(args.padding)
    if args.spacing is not None:
        config.box_spacing = Spacing.uniform(args.spacing)
    if args.target_row_height is not None:
        config.target_row_height = args.target_row_height
    if args.tolerance is not None:
        config.target_row_height_tolerance = args.tolerance
    if args.max_rows is not None:
        config.max_rows = args.max_rows
    if args.force_aspect_ratio is not None:
        config.force_aspect_ratio = args.force_aspect_ratio
    if args.hide_widows:
        config.show_widows = False
    if args.breakout_cadence is not None:
        config.full_width_breakout_row_cadence = args.breakout_cadence
    if args.widow_layout_style is not None:
        config.widow_layout_style = WidowLayoutStyle.parse(args.widow_layout_style)
    return config


def run_layout(args: argparse.Namespace) -> ComputedLayout:
    items: list[Any] = []
    file_options: dict[str, Any] = {}
    if args.input:
        items, file_options = load_input_file(args.input)
    items.extend(args.ratios)
    items.extend(args.sizes or [])

    config = build_config(args, file_options)
    logger.debug("laying out %d item(s) in a %spx container", len(items), config.container_width)
    return compute_justified_layout(items, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a justified (row-filling) grid layout")
    parser.add_argument("ratios", nargs="*", type=float, help="Item aspect ratios (width / height)")
    parser.add_argument("--sizes", nargs="+", type=parse_size, metavar="WxH", help="Item sizes, e.g. 1920x1080")
    parser.add_argument("--input", help="JSON file with items and optional options")
    parser.add_argument("--container-width", type=float)
    parser.add_argument("--padding", type=float, help="Container padding on every edge")
    parser.add_argument("--spacing", type=float, help="Horizontal and vertical box spacing")
    parser.add_argument("--target-row-height", type=float)
    parser.add_argument("--tolerance", type=float, help="Target row height tolerance (fraction)")
    parser.add_argument("--max-rows", type=int)
    parser.add_argument("--force-aspect-ratio", type=float)
    parser.add_argument("--hide-widows", action="store_true", help="Drop an incomplete last row")
    parser.add_argument("--breakout-cadence", type=int, help="Every Nth row is a full-width breakout row")
    parser.add_argument("--widow-layout-style", choices=[s.value for s in WidowLayoutStyle])
    parser.add_argument("--indent", type=int, default=None, help="Indent JSON output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        computed = run_layout(args)
    except (LayoutError, KeyError, TypeError, ValueError, OSError) as e:
        logger.error("layout failed: %s", e)
        return 2

    print(json.dumps(computed.to_dict(), indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
