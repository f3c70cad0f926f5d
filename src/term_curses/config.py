"""Screen configuration."""

from dataclasses import dataclass
from typing import Optional

# Number of style flags packed below the color-pair field.
STYLE_BITS = 9

SCRATCH_SIZING = ("target", "standard")


@dataclass
class ScreenConfig:
    """Tunable constants of a :class:`~term_curses.screen.Screen`.

    Attributes:
        color_bits: Width of the color-pair field at the top of an attribute word.
            The pair table holds ``1 << color_bits`` pairs.
        word_bits: Total width of an attribute word.
        num_colors: Size of the palette.
        has_colors: Whether the display supports colors at all.
        can_change_color: Whether palette entries may be redefined.
        scratch_sizing: ``"target"`` bounds formatted output by the target
            window's cell count, ``"standard"`` by the standard window's.
        inkey_timeout: Seconds a blocking read waits per poll, or None to
            wait indefinitely.
    """
    color_bits: int = 6
    word_bits: int = 32
    num_colors: int = 8
    has_colors: bool = True
    can_change_color: bool = False
    scratch_sizing: str = "target"
    inkey_timeout: Optional[float] = None

    def __post_init__(self):
        if self.color_bits <= 0:
            raise ValueError(f"color_bits must be positive, got {self.color_bits}")
        if self.word_bits - self.color_bits < STYLE_BITS:
            raise ValueError(
                f"{self.word_bits}-bit attribute word leaves no room for "
                f"{STYLE_BITS} style bits below a {self.color_bits}-bit color field"
            )
        if self.num_colors < 8:
            raise ValueError(f"num_colors must be at least 8, got {self.num_colors}")
        if self.scratch_sizing not in SCRATCH_SIZING:
            raise ValueError(
                f"scratch_sizing must be one of {SCRATCH_SIZING}, got {self.scratch_sizing!r}"
            )

    @property
    def max_pairs(self) -> int:
        """Capacity of the color-pair table."""
        return 1 << self.color_bits
