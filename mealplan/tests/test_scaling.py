import unittest
from mealplan.logic.shopping.scaling import scale_quantity
from mealplan.utilities.errors import ConfigurationError, DegenerateScalingError


class TestScaleQuantity(unittest.TestCase):

    def test_scales_proportionally(self):
        self.assertEqual(scale_quantity(100, 4, 2), 50)
        self.assertEqual(scale_quantity(50, 4, 4), 50)
        self.assertEqual(scale_quantity(100, 4, 2) + scale_quantity(50, 4, 4), 100)

    def test_no_rounding(self):
        self.assertAlmostEqual(scale_quantity(1, 3, 2), 2 / 3)
        self.assertAlmostEqual(scale_quantity(16.6667, 12, 6), 8.33335, places=6)

    def test_same_servings_is_identity(self):
        self.assertEqual(scale_quantity(0.25, 2, 2), 0.25)

    def test_zero_original_servings_raises(self):
        with self.assertRaises(DegenerateScalingError) as ctx:
            scale_quantity(2, 0, 4)
        self.assertEqual(ctx.exception.original_servings, 0)

    def test_negative_original_servings_is_a_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            scale_quantity(2, -1, 4)


if __name__ == '__main__':
    unittest.main()
