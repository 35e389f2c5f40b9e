from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Protocol

import numpy as np

from .geometry import Rect


class Canvas(Protocol):
    """Drawing surface borrowed by the painter for a single paint call."""

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def translate(self, dx: float, dy: float) -> None:
        ...

    def scale(self, sx: float, sy: float) -> None:
        ...

    def clip_rect(self, rect: Rect) -> None:
        ...

    def draw_picture(self, picture: Any) -> None:
        ...


@contextmanager
def canvas_state(canvas: Canvas) -> Iterator[Canvas]:
    """Scope canvas transform/clip changes; restore runs even on error."""

    canvas.save()
    try:
        yield canvas
    finally:
        canvas.restore()


def translation_matrix(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]], dtype=np.float64)


def scale_matrix(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Map an (n, 2) array of points through a 3x3 affine matrix."""

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    ones = np.ones((pts.shape[0], 1), dtype=np.float64)
    mapped = np.hstack([pts, ones]) @ matrix.T
    return mapped[:, :2]


@dataclass(frozen=True)
class CanvasOp:
    name: str
    args: tuple[Any, ...] = ()


class RecordingCanvas:
    """Canvas that records every call and tracks the current transform.

    Useful for asserting operation sequences and for mapping local points to
    device space without rasterizing anything.
    """

    def __init__(self) -> None:
        self.ops: list[CanvasOp] = []
        self.save_count = 0
        self.restore_count = 0
        self._matrix = np.identity(3, dtype=np.float64)
        self._stack: list[tuple[np.ndarray, Rect | None]] = []
        self._clip: Rect | None = None
        self.pictures_drawn: list[tuple[Any, np.ndarray, Rect | None]] = []

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def device_clip(self) -> Rect | None:
        return self._clip

    def op_names(self) -> list[str]:
        return [op.name for op in self.ops]

    def save(self) -> None:
        self.ops.append(CanvasOp("save"))
        self.save_count += 1
        self._stack.append((self._matrix.copy(), self._clip))

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore called without matching save")
        self.ops.append(CanvasOp("restore"))
        self.restore_count += 1
        self._matrix, self._clip = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self.ops.append(CanvasOp("translate", (dx, dy)))
        self._matrix = self._matrix @ translation_matrix(dx, dy)

    def scale(self, sx: float, sy: float) -> None:
        self.ops.append(CanvasOp("scale", (sx, sy)))
        self._matrix = self._matrix @ scale_matrix(sx, sy)

    def clip_rect(self, rect: Rect) -> None:
        self.ops.append(CanvasOp("clip_rect", (rect,)))
        device = device_bounds(self._matrix, rect)
        self._clip = device if self._clip is None else self._clip.intersect(device)

    def draw_picture(self, picture: Any) -> None:
        self.ops.append(CanvasOp("draw_picture", (picture,)))
        self.pictures_drawn.append((picture, self._matrix.copy(), self._clip))

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        mapped = transform_points(self._matrix, np.array([[x, y]]))[0]
        return (float(mapped[0]), float(mapped[1]))


def device_bounds(matrix: np.ndarray, rect: Rect) -> Rect:
    """Axis-aligned device-space bounds of `rect` under `matrix`."""

    mapped = transform_points(matrix, np.array(rect.corners()))
    left, top = mapped.min(axis=0)
    right, bottom = mapped.max(axis=0)
    return Rect.from_ltrb(float(left), float(top), float(right), float(bottom))
