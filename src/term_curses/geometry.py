"""
Rectangles and window placement.

Windows are placed inside the screen with :class:`ConstrainedRect`, which
clamps a requested origin and size so the window always fits the display.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class Rect:
    """A rectangle of cells: origin (y, x) and size (height, width)."""
    y: int = 0
    x: int = 0
    height: int = 0
    width: int = 0

    @property
    def cells(self) -> int:
        return self.height * self.width

    def contains(self, row, col) -> bool:
        """Whether (row, col), relative to the origin, lies inside the rectangle."""
        return 0 <= row < self.height and 0 <= col < self.width


@dataclass
class Placement:
    """A requested window placement.

    Any field may be None. Sizes given as floats are fractions (0.0 to 1.0)
    of the space left between the origin and the far edge. A zero or
    missing size extends to the edge of the bounds, and a missing origin
    centers the window.
    """
    y: Optional[int] = None
    x: Optional[int] = None
    height: Optional[Union[int, float]] = None
    width: Optional[Union[int, float]] = None


class ConstrainedRect:
    """A placement constrained to lie within a bounding rectangle.

    Attributes:
        base: The requested placement
        bounds: The enclosing rectangle, typically the whole screen
    """

    def __init__(self, base: Placement, bounds: Rect):
        self.base = base
        self.bounds = bounds

    @staticmethod
    def _clamp(val, minval, maxval):
        """Clamp a value between min and max, scaling float fractions first."""
        if isinstance(val, float):
            return max(minval, min(maxval, int(round(val * maxval))))
        return max(minval, min(maxval, val))

    @staticmethod
    def _origin(req, start, span, size):
        if req is None:
            return start + (span - size) // 2
        return ConstrainedRect._clamp(req, start, start + span - 1)

    @property
    def height(self) -> int:
        """Height, extending to the bottom edge when zero or unset."""
        avail = self.bounds.height - max(0, (self.base.y or 0) - self.bounds.y)
        if not self.base.height:
            return max(1, avail)
        return max(1, self._clamp(self.base.height, 1, max(1, avail)))

    @property
    def width(self) -> int:
        """Width, extending to the right edge when zero or unset."""
        avail = self.bounds.width - max(0, (self.base.x or 0) - self.bounds.x)
        if not self.base.width:
            return max(1, avail)
        return max(1, self._clamp(self.base.width, 1, max(1, avail)))

    @property
    def y(self) -> int:
        """Top row, centered vertically when unset."""
        return self._origin(self.base.y, self.bounds.y, self.bounds.height, self.height)

    @property
    def x(self) -> int:
        """Left column, centered horizontally when unset."""
        return self._origin(self.base.x, self.bounds.x, self.bounds.width, self.width)

    def rect(self) -> Rect:
        return Rect(self.y, self.x, self.height, self.width)
