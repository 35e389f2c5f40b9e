from __future__ import annotations

from pathlib import Path

from PIL import Image

from .raster import RasterCanvas


def to_image(canvas: RasterCanvas) -> Image.Image:
    return Image.fromarray(canvas.pixels.copy())


def save_png(canvas: RasterCanvas, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_image(canvas).save(path, format="PNG")
    return path
