from __future__ import annotations

import os
import unittest
from unittest import mock

from climate_canvas.config import FONT_ENV_VAR, RATIO_ENV_VAR, REVEAL_ENV_VAR, RenderSettings


class RenderSettingsTests(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = RenderSettings.from_env()
        self.assertIsNone(settings.device_pixel_ratio)
        self.assertEqual(settings.reveal_ms, 1800.0)
        self.assertEqual(settings.font_family, "Inter")

    def test_reads_overrides(self) -> None:
        env = {RATIO_ENV_VAR: "2", REVEAL_ENV_VAR: "900", FONT_ENV_VAR: "DejaVu Sans"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = RenderSettings.from_env()
        self.assertEqual(settings.device_pixel_ratio, 2.0)
        self.assertEqual(settings.reveal_ms, 900.0)
        self.assertEqual(settings.font_family, "DejaVu Sans")

    def test_invalid_values_fall_back_with_warning(self) -> None:
        env = {RATIO_ENV_VAR: "retina", REVEAL_ENV_VAR: "-5", FONT_ENV_VAR: "  "}
        with mock.patch.dict(os.environ, env, clear=True):
            with self.assertLogs("climate_canvas.config", level="WARNING") as logs:
                settings = RenderSettings.from_env()
        self.assertEqual(len(logs.records), 2)
        self.assertIsNone(settings.device_pixel_ratio)
        self.assertEqual(settings.reveal_ms, 1800.0)
        self.assertEqual(settings.font_family, "Inter")

    def test_direct_construction_is_validated(self) -> None:
        with self.assertRaises(ValueError):
            RenderSettings(reveal_ms=0)
        with self.assertRaises(ValueError):
            RenderSettings(device_pixel_ratio=-1.0)
        with self.assertRaises(ValueError):
            RenderSettings(font_family="")


if __name__ == "__main__":
    unittest.main()
