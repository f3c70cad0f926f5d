"""
Color palette and color-pair table.

One :class:`ColorTable` belongs to each screen. It stays inert until
:meth:`ColorTable.start_color` switches color mode on, and color mode is
never switched off again.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import ScreenConfig
from .errors import ERR, OK, Status

logger = logging.getLogger(__name__)

COLOR_BLACK = 0
COLOR_RED = 1
COLOR_GREEN = 2
COLOR_YELLOW = 3
COLOR_BLUE = 4
COLOR_MAGENTA = 5
COLOR_CYAN = 6
COLOR_WHITE = 7

MAX_INTENSITY = 1000


@dataclass(frozen=True)
class RGB:
    """A palette entry; each channel ranges over 0..1000."""
    r: int = 0
    g: int = 0
    b: int = 0

    def __iter__(self):
        return iter((self.r, self.g, self.b))


DEFAULT_PALETTE = {
    COLOR_BLACK: RGB(0, 0, 0),
    COLOR_RED: RGB(1000, 0, 0),
    COLOR_GREEN: RGB(0, 1000, 0),
    COLOR_YELLOW: RGB(1000, 1000, 0),
    COLOR_BLUE: RGB(0, 0, 1000),
    COLOR_MAGENTA: RGB(1000, 0, 1000),
    COLOR_CYAN: RGB(0, 1000, 1000),
    COLOR_WHITE: RGB(1000, 1000, 1000),
}

NAMED_COLORS = {
    "black": COLOR_BLACK,
    "red": COLOR_RED,
    "green": COLOR_GREEN,
    "yellow": COLOR_YELLOW,
    "blue": COLOR_BLUE,
    "magenta": COLOR_MAGENTA,
    "cyan": COLOR_CYAN,
    "white": COLOR_WHITE,
}


class ColorTable:
    """Fixed-capacity palette and pair table.

    Attributes:
        config: Capabilities and capacities
        enabled: Whether color mode has been started
        palette: ``num_colors`` RGB entries
        pairs: ``max_pairs`` (foreground, background) entries; pair 0 is the default
    """

    def __init__(self, config: Optional[ScreenConfig] = None):
        self.config = config or ScreenConfig()
        self.enabled = False
        self.palette: List[RGB] = [RGB()] * self.config.num_colors
        self.pairs: List[Tuple[int, int]] = [(0, 0)] * self.config.max_pairs
        self._populated = False

    def has_colors(self) -> bool:
        return self.config.has_colors

    def can_change_color(self) -> bool:
        return self.config.has_colors and self.config.can_change_color

    @property
    def colors(self) -> int:
        """Number of palette entries available, like curses' ``COLORS``."""
        return self.config.num_colors if self.has_colors() else 0

    @property
    def color_pairs(self) -> int:
        """Number of pairs available, like curses' ``COLOR_PAIRS``."""
        return self.config.max_pairs if self.has_colors() else 0

    def start_color(self) -> Status:
        """Enter color mode.

        Safe to call more than once: the named colors are filled only the
        first time, so later redefinitions survive.
        """
        if not self.has_colors():
            return ERR
        if not self._populated:
            for index, rgb in DEFAULT_PALETTE.items():
                self.palette[index] = rgb
            self._populated = True
        self.pairs[0] = (COLOR_WHITE, COLOR_BLACK)
        self.enabled = True
        logger.debug("color mode on: %d colors, %d pairs", self.colors, self.color_pairs)
        return OK

    def init_color(self, color: int, red: int, green: int, blue: int) -> Status:
        if not (self.enabled and self.can_change_color()):
            return ERR
        if not 0 <= color < self.colors:
            return ERR
        if not all(0 <= c <= MAX_INTENSITY for c in (red, green, blue)):
            return ERR
        self.palette[color] = RGB(red, green, blue)
        return OK

    def init_pair(self, pair: int, fg: int, bg: int) -> Status:
        """Define a color pair. Pair 0 is the screen default and cannot be redefined."""
        if not self.enabled or not 0 < pair < self.color_pairs:
            return ERR
        if not (0 <= fg < self.colors and 0 <= bg < self.colors):
            return ERR
        self.pairs[pair] = (fg, bg)
        return OK

    def pair_content(self, pair: int) -> Optional[Tuple[int, int]]:
        """Return the (foreground, background) of a pair, or None."""
        if not self.enabled or not 0 <= pair < self.color_pairs:
            return None
        return self.pairs[pair]

    def color_content(self, color: int) -> Optional[Tuple[int, int, int]]:
        """Return the (red, green, blue) of a palette entry, or None."""
        if not self.enabled or not 0 <= color < self.colors:
            return None
        return tuple(self.palette[color])
