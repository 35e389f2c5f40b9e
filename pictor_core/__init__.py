"""Viewport-fit painting of recorded pictures."""

from .canvas import Canvas, CanvasOp, RecordingCanvas, canvas_state
from .geometry import BoxConstraints, Offset, Rect, Size
from .painter import LTR, RTL, PaintConfig, PaintConfigError, TextDirection, paint
from .picture import FillPolygon, FillRect, Picture, PictureInfo, PictureRecorder, StrokeLine
from .raster import RasterCanvas
from .viewport import (
    CENTER_TARGET,
    CENTER_VIEW_BOX,
    CanvasTransform,
    apply_transform,
    compute_transform,
    scale_canvas_to_view_box,
)

__all__ = [
    "BoxConstraints",
    "CENTER_TARGET",
    "CENTER_VIEW_BOX",
    "Canvas",
    "CanvasOp",
    "CanvasTransform",
    "FillPolygon",
    "FillRect",
    "LTR",
    "Offset",
    "PaintConfig",
    "PaintConfigError",
    "Picture",
    "PictureInfo",
    "PictureRecorder",
    "RTL",
    "RasterCanvas",
    "RecordingCanvas",
    "Rect",
    "Size",
    "StrokeLine",
    "TextDirection",
    "apply_transform",
    "canvas_state",
    "compute_transform",
    "paint",
    "scale_canvas_to_view_box",
]
