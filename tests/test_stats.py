import unittest

from channel_analytics import stats


class StatsTests(unittest.TestCase):
    def test_empty_input_is_zero(self):
        self.assertEqual(stats.mean([]), 0)
        self.assertEqual(stats.median([]), 0)
        self.assertEqual(stats.stddev([]), 0)

    def test_median_even_and_odd(self):
        self.assertEqual(stats.median([1, 2, 3, 4]), 2.5)
        self.assertEqual(stats.median([3, 1, 2]), 2)

    def test_stddev_is_population_form(self):
        self.assertAlmostEqual(stats.stddev([2, 4, 4, 4, 5, 5, 7, 9]), 2.0)

    def test_pearson_perfect_correlation(self):
        self.assertAlmostEqual(stats.pearson([1, 2, 3], [2, 4, 6]), 1.0)
        self.assertAlmostEqual(stats.pearson([1, 2, 3], [3, 2, 1]), -1.0)

    def test_pearson_degenerate_inputs(self):
        self.assertEqual(stats.pearson([1, 1, 1], [1, 2, 3]), 0)
        self.assertEqual(stats.pearson([1, 2], [1]), 0)
        self.assertEqual(stats.pearson([], []), 0)

    def test_safe_div_and_clamp(self):
        self.assertEqual(stats.safe_div(5, 0), 0)
        self.assertEqual(stats.safe_div(6, 3), 2)
        self.assertEqual(stats.clamp(150, 0, 100), 100)
        self.assertEqual(stats.clamp(-5, 0, 100), 0)


if __name__ == "__main__":
    unittest.main()
