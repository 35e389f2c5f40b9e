from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Offset:
    dx: float
    dy: float

    @classmethod
    def zero(cls) -> "Offset":
        return cls(0.0, 0.0)


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Size width/height must be >= 0")

    @classmethod
    def zero(cls) -> "Size":
        return cls(0.0, 0.0)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; used for picture view boxes.

    Zero or negative extents are allowed here so callers can hold a degenerate
    view box; anything that divides by the extent must check `is_drawable`.
    """

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left=left, top=top, width=right - left, height=bottom - top)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def is_drawable(self) -> bool:
        return self.width > 0 and self.height > 0

    def corners(self) -> tuple[tuple[float, float], ...]:
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        )

    def intersect(self, other: "Rect") -> "Rect":
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect.from_ltrb(left, top, max(left, right), max(top, bottom))


@dataclass(frozen=True)
class BoxConstraints:
    """Size limits handed down by the host layout pass."""

    min_width: float = 0.0
    max_width: float = math.inf
    min_height: float = 0.0
    max_height: float = math.inf

    def __post_init__(self) -> None:
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError("BoxConstraints minimums must be >= 0")
        if self.max_width < self.min_width or self.max_height < self.min_height:
            raise ValueError("BoxConstraints maximums must be >= minimums")
        if math.isinf(self.min_width) or math.isinf(self.min_height):
            raise ValueError("BoxConstraints minimums must be finite")

    @classmethod
    def tight(cls, size: Size) -> "BoxConstraints":
        return cls(size.width, size.width, size.height, size.height)

    @classmethod
    def loose(cls, size: Size) -> "BoxConstraints":
        return cls(0.0, size.width, 0.0, size.height)

    @property
    def has_bounded_width(self) -> bool:
        return not math.isinf(self.max_width)

    @property
    def has_bounded_height(self) -> bool:
        return not math.isinf(self.max_height)

    @property
    def smallest(self) -> Size:
        return Size(self.min_width, self.min_height)

    @property
    def biggest(self) -> Size:
        width = self.max_width if self.has_bounded_width else self.min_width
        height = self.max_height if self.has_bounded_height else self.min_height
        return Size(width, height)
