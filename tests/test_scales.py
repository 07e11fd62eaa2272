from __future__ import annotations

import unittest

from climate_canvas.path import Path, QuadraticSegment, midpoint_quadratic_path
from climate_canvas.scales import (
    CHART_MARGINS,
    DataLimits,
    anchored_limits,
    gridline_ys,
    label_stride,
    layout_points,
    normalized,
    plot_rect,
    tick_values,
    tooltip_index,
)
from climate_canvas.tables import Dataset, get_dataset


class ScalesTests(unittest.TestCase):
    def test_plot_rect_applies_margins(self) -> None:
        rect = plot_rect(640, 320)
        self.assertEqual((rect.left, rect.top, rect.width, rect.height), (40.0, 20.0, 590.0, 270.0))
        self.assertEqual((rect.right, rect.bottom), (630.0, 290.0))

    def test_limits_are_anchored_to_first_and_last_sample(self) -> None:
        limits = anchored_limits([5.0, 100.0, -3.0, 10.0])
        self.assertEqual((limits.vmin, limits.vmax), (5.0, 10.0))

    def test_flat_range_maps_to_middle(self) -> None:
        self.assertEqual(normalized(7.0, DataLimits(7.0, 7.0)), 0.5)
        flat = Dataset(key="flat", labels=("a", "b", "c"), values=(5.0, 9.0, 5.0), unit="u")
        rect = plot_rect(640, 320)
        for p in layout_points(flat, rect)[::2]:
            self.assertAlmostEqual(p.y, rect.top + rect.height / 2)

    def test_layout_points_span_plot(self) -> None:
        rect = plot_rect(640, 320)
        points = layout_points(get_dataset("co2"), rect)
        self.assertEqual(len(points), 11)
        self.assertAlmostEqual(points[0].x, 40.0)
        self.assertAlmostEqual(points[-1].x, 630.0)
        self.assertAlmostEqual(points[0].y, 290.0)
        self.assertAlmostEqual(points[-1].y, 20.0)
        self.assertEqual(points[3].label, "1950")
        self.assertEqual(points[3].value, 310.0)

    def test_non_monotonic_values_may_leave_the_axis_range(self) -> None:
        spiky = Dataset(key="spiky", labels=("a", "b", "c"), values=(0.0, 10.0, 1.0), unit="u")
        rect = plot_rect(640, 320)
        middle = layout_points(spiky, rect)[1]
        self.assertLess(middle.y, rect.top)

    def test_gridlines_and_ticks(self) -> None:
        rect = plot_rect(640, 320)
        ys = gridline_ys(rect, 5)
        self.assertEqual(len(ys), 6)
        self.assertAlmostEqual(ys[0], 20.0)
        self.assertAlmostEqual(ys[-1], 290.0)
        ticks = tick_values(DataLimits(280.0, 415.0), 5)
        self.assertAlmostEqual(ticks[0], 415.0)
        self.assertAlmostEqual(ticks[-1], 280.0)
        with self.assertRaises(ValueError):
            gridline_ys(rect, 0)

    def test_label_stride(self) -> None:
        self.assertEqual(label_stride(11), 2)
        self.assertEqual(label_stride(6), 1)
        self.assertEqual(label_stride(2), 1)

    def test_tooltip_index_round_trips_sample_positions(self) -> None:
        rect = plot_rect(640, 320)
        points = layout_points(get_dataset("co2"), rect)
        for i, p in enumerate(points):
            self.assertLessEqual(abs(tooltip_index(p.x, 640, len(points)) - i), 1)

    def test_tooltip_index_is_clamped(self) -> None:
        self.assertEqual(tooltip_index(-500.0, 640, 11), 0)
        self.assertEqual(tooltip_index(5000.0, 640, 11), 10)
        self.assertEqual(tooltip_index(100.0, 40, 11), 0)

    def test_tooltip_uses_sixty_pixel_inset(self) -> None:
        # Nearest sample on the plot is 9, but the wider pointer divisor lands on 10.
        x = CHART_MARGINS.left + 555.0
        nearest_on_plot = round((x - 40.0) / 590.0 * 10)
        self.assertEqual(nearest_on_plot, 9)
        self.assertEqual(tooltip_index(x, 640, 11), 10)


class PathTests(unittest.TestCase):
    def test_midpoint_path_structure(self) -> None:
        path = midpoint_quadratic_path([(0.0, 0.0), (10.0, 10.0), (20.0, 0.0)])
        assert path is not None
        self.assertEqual(path.start, (0.0, 0.0))
        self.assertEqual(
            path.segments,
            (
                QuadraticSegment(control=(0.0, 0.0), end=(5.0, 5.0)),
                QuadraticSegment(control=(10.0, 10.0), end=(15.0, 5.0)),
                QuadraticSegment(control=(20.0, 0.0), end=(20.0, 0.0)),
            ),
        )
        self.assertEqual(path.end, (20.0, 0.0))

    def test_empty_input_has_no_path(self) -> None:
        self.assertIsNone(midpoint_quadratic_path([]))

    def test_flatten_ends_on_last_sample(self) -> None:
        path = midpoint_quadratic_path([(0.0, 0.0), (10.0, 10.0), (20.0, 0.0)])
        assert path is not None
        pts = path.flatten(4)
        self.assertEqual(pts[0], (0.0, 0.0))
        self.assertAlmostEqual(pts[-1][0], 20.0)
        self.assertAlmostEqual(pts[-1][1], 0.0)
        with self.assertRaises(ValueError):
            path.flatten(0)

    def test_flatten_skips_degenerate_segments(self) -> None:
        path = Path(start=(1.0, 1.0), segments=(QuadraticSegment((1.0, 1.0), (1.0, 1.0)),))
        self.assertEqual(path.flatten(), [(1.0, 1.0)])


if __name__ == "__main__":
    unittest.main()
