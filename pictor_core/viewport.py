"""Viewport-fit transform: map a picture's view box into a target size.

The content is scaled uniformly by the more constraining axis and offset along
the other one. The default centering mode keeps the historical formula, which
offsets by half the view box's own width/height delta (in view-box units). That
only centers correctly when the target's aspect already tracks the view box;
`centering="target"` centers against the target size instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .canvas import Canvas
from .geometry import Rect, Size


Centering = Literal["view_box", "target"]
CENTER_VIEW_BOX: Centering = "view_box"
CENTER_TARGET: Centering = "target"
CENTERING_MODES = (CENTER_VIEW_BOX, CENTER_TARGET)


@dataclass(frozen=True)
class CanvasTransform:
    """Scale applied first, then a translate expressed in view-box units."""

    scale_x: float
    scale_y: float
    translate_x: float = 0.0
    translate_y: float = 0.0

    @property
    def has_translation(self) -> bool:
        return self.translate_x != 0.0 or self.translate_y != 0.0

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.scale_x * (x + self.translate_x),
            self.scale_y * (y + self.translate_y),
        )


def compute_transform(
    target_size: Size,
    view_box: Rect,
    *,
    centering: Centering = CENTER_VIEW_BOX,
) -> CanvasTransform:
    if centering not in CENTERING_MODES:
        raise ValueError(f"unknown centering mode: {centering}")
    if not view_box.is_drawable:
        raise ValueError("view box width/height must be > 0")
    vb_w = view_box.width
    vb_h = view_box.height
    xscale = target_size.width / vb_w
    yscale = target_size.height / vb_h

    if centering == CENTER_TARGET:
        return _compute_target_centered(target_size, view_box, xscale, yscale)

    # exact comparison: near-equal scales take one of the branches below
    if xscale == yscale:
        return CanvasTransform(scale_x=xscale, scale_y=yscale)
    if xscale < yscale:
        return CanvasTransform(
            scale_x=xscale,
            scale_y=xscale,
            translate_y=(vb_w - vb_h) / 2,
        )
    return CanvasTransform(
        scale_x=yscale,
        scale_y=yscale,
        translate_x=(vb_h - vb_w) / 2,
    )


def _compute_target_centered(
    target_size: Size,
    view_box: Rect,
    xscale: float,
    yscale: float,
) -> CanvasTransform:
    scale = min(xscale, yscale)
    tx = -view_box.left
    ty = -view_box.top
    if scale > 0:
        tx += (target_size.width / scale - view_box.width) / 2
        ty += (target_size.height / scale - view_box.height) / 2
    return CanvasTransform(scale_x=scale, scale_y=scale, translate_x=tx, translate_y=ty)


def apply_transform(canvas: Canvas, transform: CanvasTransform) -> None:
    canvas.scale(transform.scale_x, transform.scale_y)
    if transform.has_translation:
        canvas.translate(transform.translate_x, transform.translate_y)


def scale_canvas_to_view_box(
    canvas: Canvas,
    desired_size: Size,
    view_box: Rect,
    *,
    centering: Centering = CENTER_VIEW_BOX,
) -> CanvasTransform:
    transform = compute_transform(desired_size, view_box, centering=centering)
    apply_transform(canvas, transform)
    return transform
