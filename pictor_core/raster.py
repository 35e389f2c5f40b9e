from __future__ import annotations

import math

import numpy as np

from .canvas import device_bounds, scale_matrix, transform_points, translation_matrix
from .geometry import Rect
from .picture import RGBA, FillPolygon, FillRect, Picture, StrokeLine


class RasterCanvas:
    """RGBA numpy canvas that replays `Picture` commands.

    Transforms compose like a conventional 2D canvas: each call post-multiplies
    the current matrix. Clips are axis-aligned and kept in device space.
    """

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("RasterCanvas width/height must be > 0")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels[:, :] = np.asarray(background, dtype=np.uint8)
        self._matrix = np.identity(3, dtype=np.float64)
        self._clip = Rect(0.0, 0.0, float(width), float(height))
        self._stack: list[tuple[np.ndarray, Rect]] = []

    @property
    def save_depth(self) -> int:
        return len(self._stack)

    @property
    def device_clip(self) -> Rect:
        return self._clip

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return (r, g, b, a)

    def save(self) -> None:
        self._stack.append((self._matrix.copy(), self._clip))

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore called without matching save")
        self._matrix, self._clip = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._matrix = self._matrix @ translation_matrix(dx, dy)

    def scale(self, sx: float, sy: float) -> None:
        self._matrix = self._matrix @ scale_matrix(sx, sy)

    def clip_rect(self, rect: Rect) -> None:
        self._clip = self._clip.intersect(device_bounds(self._matrix, rect))

    def draw_picture(self, picture: Picture) -> None:
        for command in picture.commands:
            if isinstance(command, FillRect):
                self._fill_polygon(np.array(command.rect.corners()), command.color)
            elif isinstance(command, FillPolygon):
                self._fill_polygon(np.array(command.points), command.color)
            elif isinstance(command, StrokeLine):
                self._stroke_line(command)
            else:
                raise TypeError(f"unsupported draw command: {type(command).__name__}")

    def _fill_polygon(self, points: np.ndarray, color: RGBA) -> None:
        pts = transform_points(self._matrix, points)
        left, top = pts.min(axis=0)
        right, bottom = pts.max(axis=0)
        window = _pixel_window(self._clip.intersect(Rect.from_ltrb(left, top, right, bottom)))
        if window is None:
            return
        x0, y0, x1, y1 = window
        gx, gy = np.meshgrid(np.arange(x0, x1) + 0.5, np.arange(y0, y1) + 0.5)
        inside = np.zeros(gx.shape, dtype=bool)
        # even-odd rule against pixel centres
        for (xa, ya), (xb, yb) in zip(pts, np.roll(pts, -1, axis=0)):
            if ya == yb:
                continue
            crosses = (ya > gy) != (yb > gy)
            x_at = xa + (gy - ya) * (xb - xa) / (yb - ya)
            inside ^= crosses & (gx < x_at)
        self._blend(x0, y0, inside, color)

    def _stroke_line(self, line: StrokeLine) -> None:
        window = _pixel_window(self._clip)
        if window is None:
            return
        cx0, cy0, cx1, cy1 = window
        (ax, ay), (bx, by) = transform_points(
            self._matrix, np.array([[line.x0, line.y0], [line.x1, line.y1]])
        )
        stretch = math.sqrt(abs(np.linalg.det(self._matrix[:2, :2])))
        brush = max(1, int(round(line.width * stretch)))
        radius = brush // 2
        # only walk the part of the segment whose brush can reach the window
        segment = _clip_segment(
            (float(ax), float(ay), float(bx), float(by)),
            (cx0 - radius, cy0 - radius, cx1 + radius, cy1 + radius),
        )
        if segment is None:
            return
        sx0, sy0, sx1, sy1 = (int(math.floor(v)) for v in segment)
        xs, ys = _bresenham(sx0, sy0, sx1, sy1)
        mask = np.zeros((cy1 - cy0, cx1 - cx0), dtype=bool)
        for oy in range(-radius, radius + 1):
            for ox in range(-radius, radius + 1):
                px = xs + ox
                py = ys + oy
                keep = (px >= cx0) & (px < cx1) & (py >= cy0) & (py < cy1)
                mask[py[keep] - cy0, px[keep] - cx0] = True
        self._blend(cx0, cy0, mask, color=line.color)

    def _blend(self, x0: int, y0: int, mask: np.ndarray, color: RGBA) -> None:
        a = color[3] / 255.0
        if a <= 0.0 or not mask.any():
            return
        h, w = mask.shape
        view = self.pixels[y0 : y0 + h, x0 : x0 + w]
        current = view[mask, :3].astype(np.float32)
        rgb = np.asarray(color[0:3], dtype=np.float32)
        view[mask, :3] = (rgb * a + current * (1.0 - a)).astype(np.uint8)
        view[mask, 3] = 255


def _pixel_window(rect: Rect) -> tuple[int, int, int, int] | None:
    """Pixel index range whose centres fall inside `rect` (half-open)."""

    x0 = max(0, math.ceil(rect.left - 0.5))
    y0 = max(0, math.ceil(rect.top - 0.5))
    x1 = math.ceil(rect.right - 0.5)
    y1 = math.ceil(rect.bottom - 0.5)
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1, y1)


def _clip_segment(
    segment: tuple[float, float, float, float],
    bounds: tuple[float, float, float, float],
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment against `(left, top, right, bottom)`."""

    ax, ay, bx, by = segment
    left, top, right, bottom = bounds
    dx = bx - ax
    dy = by - ay
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, ax - left), (dx, right - ax), (-dy, ay - top), (dy, bottom - ay)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (ax + t0 * dx, ay + t0 * dy, ax + t1 * dx, ay + t1 * dy)


def _bresenham(x0: int, y0: int, x1: int, y1: int) -> tuple[np.ndarray, np.ndarray]:
    xs: list[int] = []
    ys: list[int] = []
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        xs.append(x0)
        ys.append(y0)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return np.asarray(xs, dtype=np.int64), np.asarray(ys, dtype=np.int64)
