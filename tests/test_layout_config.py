import unittest

from app.justified.layout.config import LayoutConfig, Padding, Spacing, WidowLayoutStyle
from app.justified.layout.errors import InvalidConfig


class TestLayoutConfig(unittest.TestCase):
    def test_defaults(self):
        config = LayoutConfig()
        self.assertEqual(config.container_width, 1060)
        self.assertEqual(config.container_padding, Padding(10, 10, 10, 10))
        self.assertEqual(config.box_spacing, Spacing(10, 10))
        self.assertEqual(config.target_row_height, 320)
        self.assertEqual(config.target_row_height_tolerance, 0.25)
        self.assertIsNone(config.max_rows)
        self.assertTrue(config.show_widows)
        self.assertIs(config.widow_layout_style, WidowLayoutStyle.LEFT)
        self.assertEqual(config.widow_count, 0)
        self.assertEqual(config.row_width, 1040)

    def test_from_mapping_camel_case(self):
        config = LayoutConfig.from_mapping(
            {
                "containerWidth": 800,
                "containerPadding": 0,
                "boxSpacing": {"horizontal": 4},
                "targetRowHeight": 200,
                "widowLayoutStyle": "Center",
                "fullWidthBreakoutRowCadence": 3,
                "maxNumRows": 5,
            }
        )
        self.assertEqual(config.container_width, 800)
        self.assertEqual(config.container_padding, Padding(0, 0, 0, 0))
        self.assertEqual(config.box_spacing, Spacing(4, 10))
        self.assertEqual(config.target_row_height, 200)
        self.assertIs(config.widow_layout_style, WidowLayoutStyle.CENTER)
        self.assertEqual(config.full_width_breakout_row_cadence, 3)
        self.assertEqual(config.max_rows, 5)

    def test_from_mapping_partial_padding_keeps_defaults(self):
        config = LayoutConfig.from_mapping({"container_padding": {"top": 0}})
        self.assertEqual(config.container_padding, Padding(left=10, right=10, top=0, bottom=10))

    def test_from_mapping_rejects_unknown(self):
        with self.assertRaises(InvalidConfig):
            LayoutConfig.from_mapping({"columns": 3})
        with self.assertRaises(InvalidConfig):
            LayoutConfig.from_mapping({"containerPadding": {"middle": 3}})
        with self.assertRaises(InvalidConfig):
            LayoutConfig.from_mapping({"widowLayoutStyle": "diagonal"})

    def test_validate_accepts_defaults(self):
        LayoutConfig().validate()

    def test_validate_rejects_degenerate(self):
        bad = [
            LayoutConfig(container_width=0),
            LayoutConfig(container_width=-100),
            LayoutConfig(target_row_height=0),
            LayoutConfig(target_row_height=-1),
            LayoutConfig(target_row_height=float("nan")),
            LayoutConfig(target_row_height_tolerance=-0.1),
            LayoutConfig(container_width=20, container_padding=Padding.uniform(10)),
            LayoutConfig(container_padding=Padding(left=-1)),
            LayoutConfig(box_spacing=Spacing(horizontal=-1)),
            LayoutConfig(max_rows=0),
            LayoutConfig(full_width_breakout_row_cadence=0),
            LayoutConfig(force_aspect_ratio=0),
        ]
        for config in bad:
            with self.subTest(config=config):
                with self.assertRaises(InvalidConfig):
                    config.validate()

    def test_invalid_config_is_value_error(self):
        with self.assertRaises(ValueError):
            LayoutConfig(container_width=0).validate()


if __name__ == "__main__":
    unittest.main()
