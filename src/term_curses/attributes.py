"""
Attribute words.

An attribute word packs independent style flags into its low-order bits and
a color-pair index into a fixed-width high-order field::

    attrs -> PPPPPP.................SSSSSSSSS
             \\____/                 \\_______/
           color_bits (6)         style flags (9)

Cells do not store the logical word. At write time it is converted into the
display's device mask with :meth:`AttributeCodec.to_device_mask`.
"""

from .config import STYLE_BITS

# Style flags, one bit each, in bit order.
A_ALTCHARSET = 1 << 0
A_BLINK = 1 << 1
A_BOLD = 1 << 2
A_DIM = 1 << 3
A_INVIS = 1 << 4
A_PROTECT = 1 << 5
A_REVERSE = 1 << 6
A_STANDOUT = 1 << 7
A_UNDERLINE = 1 << 8

A_NORMAL = 0
A_ATTRIBUTES = (1 << STYLE_BITS) - 1

# Device cell mask of the console the display renders, 4 bits per channel set.
FOREGROUND_BLUE = 0x0001
FOREGROUND_GREEN = 0x0002
FOREGROUND_RED = 0x0004
FOREGROUND_INTENSITY = 0x0008
BACKGROUND_BLUE = 0x0010
BACKGROUND_GREEN = 0x0020
BACKGROUND_RED = 0x0040
BACKGROUND_INTENSITY = 0x0080
COMMON_LVB_REVERSE_VIDEO = 0x4000
COMMON_LVB_UNDERSCORE = 0x8000

# Background bits sit this far above the matching foreground bits.
BACKGROUND_SHIFT = 4

# Grey on black, used when color mode is off.
DEFAULT_DEVICE_MASK = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE

_STYLE_TO_DEVICE = (
    (A_BOLD, FOREGROUND_INTENSITY),
    (A_REVERSE, COMMON_LVB_REVERSE_VIDEO),
    (A_STANDOUT, BACKGROUND_INTENSITY),
    (A_UNDERLINE, COMMON_LVB_UNDERSCORE),
)


def ftob(mask: int) -> int:
    """Convert a foreground device mask into the matching background mask."""
    return mask << BACKGROUND_SHIFT


def _channel_mask(rgb) -> int:
    r, g, b = rgb
    return ((FOREGROUND_RED if r else 0) |
            (FOREGROUND_GREEN if g else 0) |
            (FOREGROUND_BLUE if b else 0))


class AttributeCodec:
    """Packs and unpacks attribute words for one word layout.

    Attributes:
        color_bits: Width of the pair-index field
        word_bits: Width of the whole word
        shift: Bit position of the pair-index field
    """

    def __init__(self, color_bits=6, word_bits=32):
        if word_bits - color_bits < STYLE_BITS:
            raise ValueError("color-pair field overlaps the style bits")
        self.color_bits = color_bits
        self.word_bits = word_bits
        self.shift = word_bits - color_bits
        self._word_mask = (1 << word_bits) - 1
        self._pair_mask = (1 << color_bits) - 1

    @classmethod
    def from_config(cls, config):
        return cls(config.color_bits, config.word_bits)

    def color_pair(self, n: int) -> int:
        """Shift a pair index into the color field.

        Indices too wide for the field lose their high bits off the top of the
        word; they are not clamped.
        """
        return (n << self.shift) & self._word_mask

    def pack(self, style: int, pair: int = 0) -> int:
        return (style & A_ATTRIBUTES) | self.color_pair(pair)

    def pair_number(self, attrs: int) -> int:
        return (attrs >> self.shift) & self._pair_mask

    def style(self, attrs: int) -> int:
        return attrs & A_ATTRIBUTES

    def to_device_mask(self, attrs: int, colors) -> int:
        """Translate an attribute word into a device cell mask.

        Style flags with a device counterpart are mapped directly. When the
        color table is in color mode and colors are fixed, each nonzero RGB
        channel of the pair's colors selects the matching device bit; the
        background bits are derived from the foreground mapping by shifting.
        Outside color mode the default grey-on-black mask is used.
        """
        mask = 0
        for flag, device in _STYLE_TO_DEVICE:
            if attrs & flag:
                mask |= device

        if not colors.enabled:
            return mask | DEFAULT_DEVICE_MASK
        if colors.can_change_color():
            return mask

        fg, bg = colors.pair_content(self.pair_number(attrs))
        mask |= _channel_mask(colors.palette[fg])
        mask |= ftob(_channel_mask(colors.palette[bg]))
        return mask
