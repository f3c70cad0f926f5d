"""
Terminal Curses Library

A curses-style programming surface (windows, cursor-addressed writes, text
attributes, color pairs and keyboard input) rendered through a
double-buffered display using the Blessed library.
"""

from .attributes import (
    A_ALTCHARSET,
    A_ATTRIBUTES,
    A_BLINK,
    A_BOLD,
    A_DIM,
    A_INVIS,
    A_NORMAL,
    A_PROTECT,
    A_REVERSE,
    A_STANDOUT,
    A_UNDERLINE,
    AttributeCodec,
)
from .backend import (
    DisplayBackend,
    InputSource,
    MemoryBackend,
    ScriptedInput,
    Surface,
)
from .blessed_backend import BlessedBackend, BlessedInput, initscr, wrapper
from .colors import (
    COLOR_BLACK,
    COLOR_BLUE,
    COLOR_CYAN,
    COLOR_GREEN,
    COLOR_MAGENTA,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_YELLOW,
    ColorTable,
)
from .config import ScreenConfig
from .engine import DisplayEngine
from .errors import ERR, INVALID, OK, BackendError, Status
from .geometry import ConstrainedRect, Placement, Rect
from .keys import KEY_F, KeyTranslator, RawEvent, key_name
from .screen import Screen
from .window import Window
from .writer import FormattedWriter

__all__ = [
    'A_ALTCHARSET',
    'A_ATTRIBUTES',
    'A_BLINK',
    'A_BOLD',
    'A_DIM',
    'A_INVIS',
    'A_NORMAL',
    'A_PROTECT',
    'A_REVERSE',
    'A_STANDOUT',
    'A_UNDERLINE',
    'AttributeCodec',
    'BackendError',
    'BlessedBackend',
    'BlessedInput',
    'COLOR_BLACK',
    'COLOR_BLUE',
    'COLOR_CYAN',
    'COLOR_GREEN',
    'COLOR_MAGENTA',
    'COLOR_RED',
    'COLOR_WHITE',
    'COLOR_YELLOW',
    'ColorTable',
    'ConstrainedRect',
    'DisplayBackend',
    'DisplayEngine',
    'ERR',
    'FormattedWriter',
    'INVALID',
    'InputSource',
    'KEY_F',
    'KeyTranslator',
    'MemoryBackend',
    'OK',
    'Placement',
    'RawEvent',
    'Rect',
    'Screen',
    'ScreenConfig',
    'ScriptedInput',
    'Status',
    'Surface',
    'Window',
    'initscr',
    'key_name',
    'wrapper',
]

__version__ = '0.1.0'
