from __future__ import annotations

import logging
from typing import Callable

from pictor_core.canvas import Canvas
from pictor_core.geometry import BoxConstraints, Offset, Size
from pictor_core.painter import PaintConfig, TextDirection, paint
from pictor_core.picture import PictureInfo
from pictor_core.viewport import CENTER_VIEW_BOX, CENTERING_MODES, Centering


LOGGER = logging.getLogger(__name__)


class RenderPicture:
    """A picture in the render tree.

    Draws into whatever size its parent offers while keeping the picture's
    aspect ratio. With `match_text_direction` set, the picture is mirrored
    horizontally for right-to-left text direction. `allow_drawing_outside_view_box`
    lets the picture paint past its view box, which can cost extra overdraw.

    Every property setter compares against the previous value and requests a
    single repaint from the host only when the value changed.
    """

    sized_by_parent = True

    def __init__(
        self,
        picture: PictureInfo | None = None,
        match_text_direction: bool = False,
        text_direction: TextDirection | None = None,
        allow_drawing_outside_view_box: bool = False,
        on_needs_paint: Callable[[], None] | None = None,
        centering: Centering = CENTER_VIEW_BOX,
    ) -> None:
        _require_bool("match_text_direction", match_text_direction)
        _require_bool("allow_drawing_outside_view_box", allow_drawing_outside_view_box)
        _require_centering(centering)
        if allow_drawing_outside_view_box:
            _warn_overflow()
        self._picture = picture
        self._match_text_direction = match_text_direction
        self._text_direction = text_direction
        self._allow_drawing_outside_view_box = allow_drawing_outside_view_box
        self._on_needs_paint = on_needs_paint
        self._size: Size | None = None
        self._centering = centering
        self.needs_paint = True

    @property
    def picture(self) -> PictureInfo | None:
        return self._picture

    @picture.setter
    def picture(self, value: PictureInfo | None) -> None:
        if value == self._picture:
            return
        self._picture = value
        self.mark_needs_paint()

    @property
    def match_text_direction(self) -> bool:
        return self._match_text_direction

    @match_text_direction.setter
    def match_text_direction(self, value: bool) -> None:
        _require_bool("match_text_direction", value)
        if value == self._match_text_direction:
            return
        self._match_text_direction = value
        self.mark_needs_paint()

    @property
    def text_direction(self) -> TextDirection | None:
        """May go back to None only once `match_text_direction` is off."""
        return self._text_direction

    @text_direction.setter
    def text_direction(self, value: TextDirection | None) -> None:
        if value == self._text_direction:
            return
        self._text_direction = value
        self.mark_needs_paint()

    @property
    def allow_drawing_outside_view_box(self) -> bool:
        return self._allow_drawing_outside_view_box

    @allow_drawing_outside_view_box.setter
    def allow_drawing_outside_view_box(self, value: bool) -> None:
        _require_bool("allow_drawing_outside_view_box", value)
        if value == self._allow_drawing_outside_view_box:
            return
        if value:
            _warn_overflow()
        self._allow_drawing_outside_view_box = value
        self.mark_needs_paint()

    @property
    def centering(self) -> Centering:
        return self._centering

    @centering.setter
    def centering(self, value: Centering) -> None:
        _require_centering(value)
        if value == self._centering:
            return
        self._centering = value
        self.mark_needs_paint()

    @property
    def size(self) -> Size | None:
        return self._size

    @size.setter
    def size(self, value: Size | None) -> None:
        if value == self._size:
            return
        self._size = value
        self.mark_needs_paint()

    @property
    def paint_config(self) -> PaintConfig:
        return PaintConfig(
            match_text_direction=self._match_text_direction,
            text_direction=self._text_direction,
            allow_drawing_outside_view_box=self._allow_drawing_outside_view_box,
        )

    def mark_needs_paint(self) -> None:
        self.needs_paint = True
        if self._on_needs_paint is not None:
            self._on_needs_paint()

    def hit_test_self(self, position: Offset) -> bool:
        return True

    def perform_resize(self, constraints: BoxConstraints) -> Size:
        # fill the offered space; an unbounded axis falls back to its minimum
        self.size = constraints.biggest
        return self.size

    def paint(self, canvas: Canvas, offset: Offset) -> None:
        paint(
            canvas,
            offset,
            self._size,
            self._picture,
            self.paint_config,
            centering=self._centering,
        )
        self.needs_paint = False


def _require_bool(name: str, value: object) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a bool")


def _require_centering(value: object) -> None:
    if value not in CENTERING_MODES:
        raise ValueError(f"unknown centering mode: {value}")


def _warn_overflow() -> None:
    LOGGER.warning("drawing outside the view box enabled; picture may overdraw its bounds")
