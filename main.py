from __future__ import annotations

import argparse
import logging
from pathlib import Path
import tomllib

from pictor_core.export import save_png
from pictor_core.geometry import BoxConstraints, Offset, Rect, Size
from pictor_core.painter import RTL, PaintConfig
from pictor_core.picture import PictureInfo, PictureRecorder
from pictor_core.raster import RasterCanvas
from pictor_core.viewport import CENTER_TARGET, CENTER_VIEW_BOX
from pictor_ui.render_picture import RenderPicture


LOGGER = logging.getLogger("pictor")


def build_demo_picture() -> PictureInfo:
    """Asymmetric arrow on a 40x50 view box, so mirroring and clipping show."""

    recorder = PictureRecorder()
    recorder.fill_rect(Rect(0.0, 0.0, 40.0, 50.0), (24, 32, 44, 255))
    recorder.fill_polygon([(6.0, 25.0), (22.0, 10.0), (22.0, 40.0)], (240, 180, 40, 255))
    recorder.fill_rect(Rect(22.0, 20.0, 14.0, 10.0), (240, 180, 40, 255))
    recorder.stroke_line((0.0, 48.0), (40.0, 48.0), (90, 200, 250, 255), width=2.0)
    # sits past the right edge; only visible with overflow enabled
    recorder.fill_rect(Rect(38.0, 2.0, 10.0, 6.0), (220, 60, 60, 255))
    return PictureInfo(picture=recorder.end_recording(), view_box=Rect(0.0, 0.0, 40.0, 50.0))


def load_paint_config(path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    with path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("paint", {})
    if not isinstance(table, dict):
        raise ValueError("`paint` must be a table")
    return dict(table)


def render_picture(
    out: Path,
    *,
    width: int,
    height: int,
    config: PaintConfig,
    centering: str = CENTER_VIEW_BOX,
) -> Path:
    canvas = RasterCanvas(width=width, height=height, background=(0, 0, 0, 255))
    render = RenderPicture(
        picture=build_demo_picture(),
        match_text_direction=config.match_text_direction,
        text_direction=config.text_direction,
        allow_drawing_outside_view_box=config.allow_drawing_outside_view_box,
        centering=centering,  # type: ignore[arg-type]
    )
    render.perform_resize(BoxConstraints.tight(Size(float(width), float(height))))
    render.paint(canvas, Offset.zero())
    LOGGER.info("rendered %sx%s picture to %s", width, height, out)
    return save_png(canvas, out)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pictor")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render-picture", help="Paint the demo picture into a PNG.")
    render.add_argument("out", type=Path)
    render.add_argument("--width", type=int, default=320)
    render.add_argument("--height", type=int, default=200)
    render.add_argument("--config", type=Path, default=None, help="TOML file with a [paint] table.")
    render.add_argument("--rtl", action="store_true", help="Mirror for right-to-left text direction.")
    render.add_argument("--allow-overflow", action="store_true", help="Skip clipping to the view box.")
    render.add_argument("--centering", choices=[CENTER_VIEW_BOX, CENTER_TARGET], default=CENTER_VIEW_BOX)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render-picture":
        if args.width <= 0 or args.height <= 0:
            raise ValueError("--width/--height must be > 0")
        raw = load_paint_config(args.config)
        if args.rtl:
            raw["match_text_direction"] = True
            raw["text_direction"] = RTL
        if args.allow_overflow:
            raw["allow_drawing_outside_view_box"] = True
        config = PaintConfig.from_mapping(raw)
        path = render_picture(
            args.out,
            width=args.width,
            height=args.height,
            config=config,
            centering=args.centering,
        )
        print(f"wrote {path}")
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
