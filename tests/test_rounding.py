import unittest

from app.justified.utils.rounding import round_half_away


class TestRoundHalfAway(unittest.TestCase):
    def test_halves_round_away_from_zero(self):
        self.assertEqual(round_half_away(0.5), 1.0)
        self.assertEqual(round_half_away(2.5), 3.0)
        self.assertEqual(round_half_away(-0.5), -1.0)
        self.assertEqual(round_half_away(-2.5), -3.0)

    def test_non_halves(self):
        self.assertEqual(round_half_away(351.72), 352.0)
        self.assertEqual(round_half_away(140.8), 141.0)
        self.assertEqual(round_half_away(-0.3), 0.0)
        self.assertEqual(round_half_away(0.0), 0.0)

    def test_returns_float(self):
        self.assertIsInstance(round_half_away(3), float)


if __name__ == "__main__":
    unittest.main()
