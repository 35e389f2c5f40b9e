from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .geometry import Rect


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class FillRect:
    rect: Rect
    color: RGBA


@dataclass(frozen=True)
class FillPolygon:
    points: tuple[tuple[float, float], ...]
    color: RGBA


@dataclass(frozen=True)
class StrokeLine:
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    width: float = 1.0


DrawCommand = Union[FillRect, FillPolygon, StrokeLine]


@dataclass(frozen=True, eq=False)
class Picture:
    """Immutable, replayable list of draw commands in view-box coordinates.

    Handles compare by identity; two recordings with the same commands are
    distinct pictures.
    """

    commands: tuple[DrawCommand, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)


class PictureRecorder:
    """Collects draw commands and freezes them into a `Picture`."""

    def __init__(self) -> None:
        self._commands: list[DrawCommand] = []
        self._finished = False

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        self._append(FillRect(rect=rect, color=_check_color(color)))

    def fill_polygon(self, points: list[tuple[float, float]], color: RGBA) -> None:
        if len(points) < 3:
            raise ValueError("polygon needs at least 3 points")
        pts = tuple((float(x), float(y)) for x, y in points)
        self._append(FillPolygon(points=pts, color=_check_color(color)))

    def stroke_line(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        color: RGBA,
        width: float = 1.0,
    ) -> None:
        if width <= 0:
            raise ValueError("line width must be > 0")
        self._append(
            StrokeLine(
                x0=float(start[0]),
                y0=float(start[1]),
                x1=float(end[0]),
                y1=float(end[1]),
                color=_check_color(color),
                width=width,
            )
        )

    def end_recording(self) -> Picture:
        if self._finished:
            raise RuntimeError("recording already ended")
        self._finished = True
        return Picture(commands=tuple(self._commands))

    def _append(self, command: DrawCommand) -> None:
        if self._finished:
            raise RuntimeError("cannot record into a finished picture")
        self._commands.append(command)


@dataclass(frozen=True, eq=False)
class PictureInfo:
    """A recorded picture together with the view box it was authored against."""

    picture: Picture
    view_box: Rect

    @property
    def has_drawable_view_box(self) -> bool:
        return self.view_box.is_drawable


def _check_color(color: RGBA) -> RGBA:
    if len(color) != 4 or any(c < 0 or c > 255 for c in color):
        raise ValueError(f"color must be 4 channels in [0, 255]: {color!r}")
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))
