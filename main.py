from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from PIL import Image

from climate_canvas.config import RenderSettings
from climate_canvas.context import RasterContext
from climate_canvas.frame_clock import AnimationLoop, FrameClock
from climate_canvas.reveal import RevealAnimator
from climate_canvas.scenes import SceneOutput, lookup_tooltip, render_heat_map, render_line_chart, render_sea_level
from climate_canvas.tables import DATASETS, SCENARIOS, get_dataset
from climate_canvas.theme import Theme
from climate_canvas.viewport import DrawingSurface

LOGGER = logging.getLogger("climate_canvas.cli")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="climate-canvas")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render one scene to a PNG file.")
    render.add_argument("scene", choices=["chart", "sea-level", "heat-map"])
    _add_surface_args(render)
    render.add_argument("--dataset", default="co2", choices=sorted(DATASETS))
    render.add_argument("--progress", type=float, default=1.0, help="Chart reveal progress in [0, 1].")
    render.add_argument("--temp", type=float, default=1.5, help="Sea-level slider temperature (1.0-4.5).")
    render.add_argument("--scenario", type=int, default=1, choices=sorted(SCENARIOS))
    render.add_argument("--out", type=Path, required=True)

    animate = sub.add_parser("animate", help="Record the chart reveal as an animated GIF.")
    _add_surface_args(animate)
    animate.add_argument("--dataset", default="co2", choices=sorted(DATASETS))
    animate.add_argument("--fps", type=float, default=30.0)
    animate.add_argument("--out", type=Path, required=True)

    tooltip = sub.add_parser("tooltip", help="Print the chart tooltip for a pointer x position.")
    tooltip.add_argument("--dataset", default="co2", choices=sorted(DATASETS))
    tooltip.add_argument("--x", type=float, required=True)
    tooltip.add_argument("--width", type=float, default=640.0)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    settings = RenderSettings.from_env()

    if args.command == "render":
        surface = _build_surface(args, settings, name=args.scene)
        output = _render_scene(args, surface)
        RasterContext(surface, font_family=settings.font_family).execute(output.commands)
        surface.save_png(args.out)
        summary = {
            "out": str(args.out),
            "size": [surface.viewport.backing_width, surface.viewport.backing_height],
            "texts": dict(output.texts),
            "values": {t.element_id: t.target for t in output.value_targets},
        }
        print(json.dumps(summary, indent=2, sort_keys=True, ensure_ascii=False))
        return

    if args.command == "animate":
        frames = _record_reveal(args, settings)
        clock = FrameClock(fps=args.fps)
        frames[0].save(
            args.out,
            format="GIF",
            save_all=True,
            append_images=frames[1:],
            duration=max(1, int(round(clock.frame_ms))),
            loop=0,
        )
        print(f"wrote {len(frames)} frames to {args.out}")
        return

    if args.command == "tooltip":
        if args.width <= 0:
            raise ValueError("width must be > 0")
        idx, text = lookup_tooltip(get_dataset(args.dataset), args.x, args.width)
        print(json.dumps({"index": idx, "text": text}, ensure_ascii=False))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_surface_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--theme", choices=["light", "dark"], default="dark")
    parser.add_argument("--width", type=float, default=640.0)
    parser.add_argument("--height", type=float, default=320.0)
    parser.add_argument("--ratio", type=float, default=None, help="Device pixel ratio (default: env or 1).")


def _build_surface(args: argparse.Namespace, settings: RenderSettings, *, name: str) -> DrawingSurface:
    if args.width <= 0:
        raise ValueError("width must be > 0")
    if args.height <= 0:
        raise ValueError("height must be > 0")
    ratio = args.ratio if args.ratio is not None else settings.device_pixel_ratio
    return DrawingSurface(args.width, args.height, device_pixel_ratio=ratio, name=name)


def _render_scene(args: argparse.Namespace, surface: DrawingSurface) -> SceneOutput:
    view = surface.viewport
    theme: Theme = args.theme
    if args.scene == "chart":
        return render_line_chart(get_dataset(args.dataset), args.progress, theme, view.logical_width, view.logical_height)
    if args.scene == "sea-level":
        return render_sea_level(args.temp, theme, view.logical_width, view.logical_height)
    return render_heat_map(args.scenario, theme, view.logical_width, view.logical_height)


def _record_reveal(args: argparse.Namespace, settings: RenderSettings) -> list[Image.Image]:
    surface = _build_surface(args, settings, name="chart")
    context = RasterContext(surface, font_family=settings.font_family)
    frames: list[Image.Image] = []

    def draw(key: str, theme: Theme, progress: float) -> None:
        view = surface.viewport
        output = render_line_chart(get_dataset(key), progress, theme, view.logical_width, view.logical_height)
        context.execute(output.commands)
        frames.append(surface.to_image().convert("RGB"))

    animator = RevealAnimator(draw, duration_ms=settings.reveal_ms)
    loop = AnimationLoop()
    loop.schedule(animator.start(args.dataset, args.theme))
    for now in FrameClock(fps=args.fps).frame_times(settings.reveal_ms):
        loop.step(now)
    LOGGER.info("recorded %d reveal frames at %.3g fps", len(frames), args.fps)
    return frames


if __name__ == "__main__":
    main()
