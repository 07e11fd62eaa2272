from __future__ import annotations

import unittest

from climate_canvas.easing import ease_out_cubic
from climate_canvas.frame_clock import AnimationLoop
from climate_canvas.reveal import RevealAnimator


class RevealAnimatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.draws: list[tuple[str, str, float]] = []
        self.animator = RevealAnimator(lambda key, theme, p: self.draws.append((key, theme, p)))

    def test_runs_from_idle_to_done(self) -> None:
        self.assertEqual(self.animator.state, "idle")
        self.animator.start("co2", "dark")
        self.assertEqual(self.animator.state, "running")
        self.assertTrue(self.animator.tick(1000.0))
        self.assertEqual(self.draws[-1], ("co2", "dark", 0.0))
        self.assertTrue(self.animator.tick(1900.0))
        self.assertAlmostEqual(self.draws[-1][2], ease_out_cubic(0.5))
        self.assertFalse(self.animator.tick(2800.0))
        self.assertEqual(self.draws[-1][2], 1.0)
        self.assertEqual(self.animator.state, "done")
        self.assertFalse(self.animator.tick(3000.0))
        self.assertEqual(len(self.draws), 3)

    def test_progress_never_decreases(self) -> None:
        self.animator.start("temp", "light")
        progress = []
        for now in (0.0, 1000.0, 400.0, 1200.0, 900.0):
            self.animator.tick(now)
            progress.append(self.animator.progress)
        self.assertEqual(progress, sorted(progress))

    def test_superseded_session_is_inert(self) -> None:
        old = self.animator.start("co2", "dark")
        self.animator.tick(0.0)
        new = self.animator.start("temp", "dark")
        self.assertFalse(old.current)
        self.assertIsNone(self.animator.advance(old, 500.0))
        self.assertFalse(old.tick(500.0))
        self.assertTrue(new.tick(500.0))
        self.assertEqual([d[0] for d in self.draws], ["co2", "temp"])
        self.assertEqual(new.generation, old.generation + 1)

    def test_cancel_returns_to_idle(self) -> None:
        session = self.animator.start("co2", "dark")
        self.animator.cancel()
        self.assertEqual(self.animator.state, "idle")
        self.assertFalse(self.animator.tick(0.0))
        self.assertFalse(session.tick(0.0))
        self.assertEqual(self.draws, [])

    def test_rejects_non_positive_duration(self) -> None:
        with self.assertRaises(ValueError):
            RevealAnimator(lambda key, theme, p: None, duration_ms=0)

    def test_loop_drops_superseded_sessions(self) -> None:
        loop = AnimationLoop()
        loop.schedule(self.animator.start("co2", "dark"))
        loop.step(0.0)
        loop.schedule(self.animator.start("temp", "dark"))
        self.assertEqual(loop.step(100.0), 1)
        self.assertEqual(self.draws[-1][0], "temp")
        while not loop.idle:
            loop.step(loop.frames * 100.0)
        self.assertEqual(self.animator.state, "done")


if __name__ == "__main__":
    unittest.main()
