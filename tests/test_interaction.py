from __future__ import annotations

import unittest

import numpy as np

from climate_canvas.config import RenderSettings
from climate_canvas.events import InputEvent
from climate_canvas.frame_clock import FrameClock
from climate_canvas.interaction import InteractionRouter, MemoryTooltipSink, TooltipState
from climate_canvas.value_animator import MemoryTextSink
from climate_canvas.viewport import DrawingSurface

FAST = RenderSettings(reveal_ms=100.0)


class InteractionRouterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.texts = MemoryTextSink()
        self.tooltip = MemoryTooltipSink()
        self.router = InteractionRouter(
            chart=DrawingSurface(640, 320, name="co2Chart"),
            sea_level=DrawingSurface(400, 300, name="seaLevelCanvas"),
            heat_map=DrawingSurface(450, 250, name="tempMapCanvas"),
            texts=self.texts,
            tooltip=self.tooltip,
            settings=FAST,
        )

    def _settle(self) -> None:
        self.router.loop.run_until_idle(FrameClock(fps=60))

    def test_start_paints_every_scene(self) -> None:
        self.router.start()
        self.assertEqual(self.router.reveal.state, "running")
        self.assertEqual(self.texts.texts["seaLevelImpact1"], "100+ coastal cities at risk")
        self.assertEqual(self.texts.texts["scenarioValue"], "Paris Agreement")
        self.assertEqual(len(self.router.loop), 3)
        self._settle()
        self.assertEqual(self.router.reveal.state, "done")
        self.assertEqual(self.texts.texts["seaLevelResult"], "0.3")
        self.assertEqual(self.texts.texts["tempResult"], "1.8")
        self.assertFalse(self.texts.visible["chartAnnotation"])
        self.assertTrue(np.any(self.router.heat_map.buffer[:, :, 3] > 0))

    def test_select_dataset_restarts_reveal(self) -> None:
        self.router.start()
        first = self.router.reveal.session
        self.assertFalse(self.router.select_dataset("co2"))
        self.assertFalse(self.router.select_dataset(None))
        with self.assertLogs("climate_canvas.interaction", level="WARNING"):
            self.assertFalse(self.router.select_dataset("methane"))
        self.assertIs(self.router.reveal.session, first)
        self.assertTrue(self.router.select_dataset("temp"))
        self.assertIsNot(self.router.reveal.session, first)
        self.router.tick(0.0)
        self.assertTrue(self.texts.visible["chartAnnotation"])
        self.assertEqual(self.texts.texts["chartAnnotation"], "Rise 1.20 °C from Pre-1800 → 2023")

    def test_pointer_move_and_leave(self) -> None:
        state = self.router.pointer_move(630.0, client_x=700.0, rect_top=100.0, scroll_y=50.0)
        self.assertEqual(state, TooltipState(text="2023: 415 ppm", left="700px", top="158px", opacity=1.0))
        self.assertEqual(self.tooltip.state, state)
        hidden = self.router.pointer_leave()
        self.assertEqual(hidden.opacity, 0.0)
        self.assertEqual(hidden.text, "2023: 415 ppm")
        self.assertEqual(self.tooltip.state, hidden)

    def test_tooltip_follows_active_dataset(self) -> None:
        self.router.select_dataset("temp")
        state = self.router.pointer_move(40.0, client_x=40.0)
        assert state is not None
        self.assertEqual(state.text, "Pre-1800: 0 °C")

    def test_set_temperature_renders_once(self) -> None:
        before = sum(1 for element, _ in self.texts.writes if element == "seaLevelImpact1")
        out = self.router.set_temperature(3.5)
        assert out is not None
        after = sum(1 for element, _ in self.texts.writes if element == "seaLevelImpact1")
        self.assertEqual(after - before, 1)
        self.assertEqual(self.texts.texts["seaLevelImpact1"], "400+ cities catastrophically flooded")
        self.assertEqual(self.texts.texts["tempIncreaseValue"], "3.5°C")
        self._settle()
        self.assertEqual(self.texts.texts["seaLevelResult"], "1.1")

    def test_set_scenario(self) -> None:
        self.router.set_scenario("4")
        self.assertEqual(self.router.scenario_id, 4)
        self.assertEqual(self.texts.texts["scenarioValue"], "Worst Case")
        with self.assertLogs("climate_canvas.interaction", level="WARNING"):
            self.assertIsNone(self.router.set_scenario(9))
        self.assertEqual(self.router.scenario_id, 4)

    def test_set_theme_restarts_reveal_with_new_theme(self) -> None:
        self.router.start()
        generation = self.router.reveal.session.generation
        self.router.set_theme("light")
        self.assertEqual(self.router.theme, "light")
        self.assertEqual(self.router.reveal.session.theme, "light")
        self.assertEqual(self.router.reveal.session.generation, generation + 1)

    def test_resize_refits_and_repaints(self) -> None:
        self.router.start()
        self.router.tick(0.0)
        self.router.chart.set_client_size(320, 160)
        self.router.resize()
        self.assertEqual(self.router.chart.buffer.shape, (160, 320, 4))
        self.assertTrue(np.all(self.router.chart.buffer[:, :, 3] == 255))

    def test_dispatch_routes_events(self) -> None:
        self.router.dispatch(InputEvent.select("temperature_input", 2.5))
        self.assertEqual(self.router.temperature, 2.5)
        self.router.dispatch(InputEvent.select("scenario_select", 3))
        self.assertEqual(self.router.scenario_id, 3)
        self.router.dispatch(InputEvent.select("dataset_select", "temp"))
        self.assertEqual(self.router.dataset_key, "temp")
        self.router.dispatch(InputEvent.pointer_move(40.0, 140.0))
        self.assertEqual(self.tooltip.state.left, "140px")
        self.router.dispatch(InputEvent("pointer_leave"))
        self.assertEqual(self.tooltip.state.opacity, 0.0)
        self.router.dispatch(InputEvent.select("theme_change", "light"))
        self.assertEqual(self.router.theme, "light")
        with self.assertLogs("climate_canvas.interaction", level="WARNING"):
            self.router.dispatch(InputEvent.select("temperature_input", "warm"))
        self.assertEqual(self.router.temperature, 2.5)

    def test_non_finite_temperature_is_ignored(self) -> None:
        self.router.set_temperature(2.0)
        before = list(self.texts.writes)
        for raw in ("nan", "inf", "-inf"):
            with self.assertLogs("climate_canvas.interaction", level="WARNING"):
                self.router.dispatch(InputEvent.select("temperature_input", raw))
        with self.assertLogs("climate_canvas.interaction", level="WARNING"):
            self.assertIsNone(self.router.set_temperature(float("nan")))
        self.assertEqual(self.router.temperature, 2.0)
        self.assertEqual(self.texts.writes, before)

    def test_ratio_override_from_settings(self) -> None:
        router = InteractionRouter(chart=DrawingSurface(100, 50), settings=RenderSettings(device_pixel_ratio=2.0))
        self.assertEqual(router.chart.buffer.shape, (100, 200, 4))

    def test_palette_overrides_reach_the_chart(self) -> None:
        router = InteractionRouter(
            chart=DrawingSurface(640, 320),
            settings=FAST,
            palette_overrides={"dark": {"co2_stroke": "#00FF00"}},
        )
        router.start()
        router.tick(0.0)
        router.tick(200.0)
        buf = router.chart.buffer
        green = (buf[:, :, 0] == 0) & (buf[:, :, 1] == 255) & (buf[:, :, 2] == 0)
        self.assertTrue(np.any(green))


class MissingTargetTests(unittest.TestCase):
    def test_missing_surfaces_disable_features_without_raising(self) -> None:
        texts = MemoryTextSink()
        router = InteractionRouter(texts=texts, settings=FAST)
        with self.assertLogs("climate_canvas.interaction", level="WARNING") as logs:
            router.start()
        self.assertEqual(len(logs.records), 3)
        self.assertIsNone(router.pointer_move(100.0, 100.0))
        self.assertIsNone(router.set_temperature(2.0))
        self.assertEqual(router.temperature, 2.0)
        self.assertEqual(router.reveal.state, "idle")
        self.assertEqual(texts.texts, {})

    def test_missing_sinks_warn_once(self) -> None:
        router = InteractionRouter(sea_level=DrawingSurface(400, 300), chart=DrawingSurface(640, 320))
        with self.assertLogs("climate_canvas.interaction", level="WARNING") as logs:
            router.set_temperature(2.0)
            router.set_temperature(2.5)
            router.pointer_move(100.0, 100.0)
            router.pointer_leave()
        messages = [r.getMessage() for r in logs.records]
        self.assertEqual(len(messages), 2)
        self.assertTrue(any("text sink" in m for m in messages))
        self.assertTrue(any("tooltip" in m for m in messages))


if __name__ == "__main__":
    unittest.main()
