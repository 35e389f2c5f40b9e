from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Literal, Mapping

from .canvas import Canvas, canvas_state
from .geometry import Offset, Size
from .picture import PictureInfo
from .viewport import CENTER_VIEW_BOX, Centering, scale_canvas_to_view_box


LOGGER = logging.getLogger(__name__)

TextDirection = Literal["ltr", "rtl"]
LTR: TextDirection = "ltr"
RTL: TextDirection = "rtl"
_TEXT_DIRECTIONS = (LTR, RTL)


class PaintConfigError(ValueError):
    """Raised when a paint configuration contradicts itself."""


@dataclass(frozen=True)
class PaintConfig:
    match_text_direction: bool = False
    text_direction: TextDirection | None = None
    allow_drawing_outside_view_box: bool = False

    @property
    def flip_horizontally(self) -> bool:
        return self.match_text_direction and self.text_direction == RTL

    def validate(self) -> "PaintConfig":
        if self.text_direction is not None and self.text_direction not in _TEXT_DIRECTIONS:
            raise PaintConfigError(f"unknown text direction: {self.text_direction!r}")
        if self.match_text_direction and self.text_direction is None:
            raise PaintConfigError("match_text_direction requires a text_direction")
        return self

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "PaintConfig":
        """Build a validated config from a decoded mapping (e.g. a TOML table)."""

        unknown = set(raw) - {"match_text_direction", "text_direction", "allow_drawing_outside_view_box"}
        if unknown:
            raise PaintConfigError(f"unknown paint config keys: {', '.join(sorted(unknown))}")
        match = raw.get("match_text_direction", False)
        allow = raw.get("allow_drawing_outside_view_box", False)
        if not isinstance(match, bool) or not isinstance(allow, bool):
            raise PaintConfigError("paint config flags must be booleans")
        direction = raw.get("text_direction")
        if isinstance(direction, str):
            direction = direction.strip().lower()
        config = cls(
            match_text_direction=match,
            text_direction=direction,
            allow_drawing_outside_view_box=allow,
        )
        return config.validate()


def paint(
    canvas: Canvas,
    offset: Offset,
    target_size: Size | None,
    picture: PictureInfo | None,
    config: PaintConfig,
    *,
    centering: Centering = CENTER_VIEW_BOX,
) -> None:
    """Paint `picture` into the rectangle at `offset` with `target_size`.

    Missing or degenerate inputs are skipped without touching the canvas. All
    transform and clip changes are scoped by a save/restore pair.
    """

    config.validate()
    if picture is None:
        LOGGER.debug("paint skipped: no picture")
        return
    if target_size is None or target_size.is_empty:
        LOGGER.debug("paint skipped: empty target size %s", target_size)
        return
    if not picture.has_drawable_view_box:
        LOGGER.debug("paint skipped: degenerate view box %s", picture.view_box)
        return

    with canvas_state(canvas):
        canvas.translate(offset.dx, offset.dy)
        if config.flip_horizontally:
            _mirror_horizontally(canvas, target_size.width)
        scale_canvas_to_view_box(canvas, target_size, picture.view_box, centering=centering)
        if not config.allow_drawing_outside_view_box:
            canvas.clip_rect(picture.view_box)
        canvas.draw_picture(picture.picture)


def _mirror_horizontally(canvas: Canvas, width: float) -> None:
    half = width / 2.0
    canvas.translate(half, 0.0)
    canvas.scale(-1.0, 1.0)
    canvas.translate(-half, 0.0)
