import math
import unittest

from app.justified.layout.item import LayoutItem


class TestLayoutItem(unittest.TestCase):
    def test_from_ratio(self):
        item = LayoutItem.from_ratio(1.5)
        self.assertEqual(item.aspect_ratio, 1.5)
        self.assertIsNone(item.force_aspect_ratio)
        self.assertEqual((item.top, item.left, item.width, item.height), (0.0, 0.0, 0.0, 0.0))

    def test_from_size(self):
        self.assertEqual(LayoutItem.from_size(1500, 1000).aspect_ratio, 1.5)
        self.assertEqual(LayoutItem.from_size(600, 800).aspect_ratio, 0.75)

    def test_from_size_zero_height_is_nan(self):
        self.assertTrue(math.isnan(LayoutItem.from_size(100, 0).aspect_ratio))

    def test_forced_ratio_wins_for_layout(self):
        item = LayoutItem.from_ratio(2.0)
        self.assertEqual(item.layout_aspect_ratio, 2.0)
        item.force_aspect_ratio = 1.0
        self.assertEqual(item.layout_aspect_ratio, 1.0)
        self.assertEqual(item.aspect_ratio, 2.0)

    def test_geometry(self):
        item = LayoutItem(aspect_ratio=1.0, top=10, left=20, width=30, height=30)
        self.assertEqual(item.geometry(), {"top": 10, "left": 20, "width": 30, "height": 30})


if __name__ == "__main__":
    unittest.main()
