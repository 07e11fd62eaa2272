from __future__ import annotations

import unittest

from climate_canvas.easing import clamp01, ease_in_out_cubic, ease_out_cubic, lerp, linear


class EasingTests(unittest.TestCase):
    def test_ease_out_cubic_endpoints(self) -> None:
        self.assertEqual(ease_out_cubic(0.0), 0.0)
        self.assertEqual(ease_out_cubic(1.0), 1.0)

    def test_ease_out_cubic_is_non_decreasing_and_decelerating(self) -> None:
        samples = [ease_out_cubic(i / 100.0) for i in range(101)]
        steps = [b - a for a, b in zip(samples, samples[1:])]
        self.assertTrue(all(step >= 0.0 for step in steps))
        self.assertTrue(all(later < earlier for earlier, later in zip(steps, steps[1:])))

    def test_ease_in_out_cubic_endpoints_and_midpoint(self) -> None:
        self.assertEqual(ease_in_out_cubic(0.0), 0.0)
        self.assertEqual(ease_in_out_cubic(1.0), 1.0)
        self.assertAlmostEqual(ease_in_out_cubic(0.5), 0.5, places=12)

    def test_ease_in_out_cubic_is_symmetric(self) -> None:
        for i in range(11):
            t = i / 10.0
            self.assertAlmostEqual(ease_in_out_cubic(t) + ease_in_out_cubic(1.0 - t), 1.0, places=12)

    def test_out_of_range_input_is_clamped(self) -> None:
        self.assertEqual(ease_out_cubic(-0.5), 0.0)
        self.assertEqual(ease_out_cubic(3.0), 1.0)
        self.assertEqual(ease_in_out_cubic(-1.0), 0.0)
        self.assertEqual(linear(1.5), 1.0)
        self.assertEqual(clamp01(0.25), 0.25)

    def test_lerp(self) -> None:
        self.assertEqual(lerp(10.0, 20.0, 0.0), 10.0)
        self.assertEqual(lerp(10.0, 20.0, 0.5), 15.0)
        self.assertEqual(lerp(10.0, 20.0, 1.0), 20.0)


if __name__ == "__main__":
    unittest.main()
