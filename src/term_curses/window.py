"""
Window state.

A :class:`Window` is an addressable rectangle with its own cursor, attribute
word and input flags. Its two display surfaces live in a
:class:`FrameBuffers` pair. Callers only ever reach those surfaces through
the ``front`` and ``back`` roles, never through a physical slot number.
"""

import logging
from typing import Optional, Tuple

from .errors import INVALID, ERR, OK, Status
from .geometry import Rect

logger = logging.getLogger(__name__)


class FrameBuffers:
    """Two physical surfaces and the index of the one currently visible.

    The back role is always the other slot, so the roles swap with a
    single index flip.
    """

    def __init__(self, first, second):
        self._slots = [first, second]
        self._prim = 0

    @property
    def prim(self) -> int:
        return self._prim

    @property
    def bbuf(self) -> int:
        return 1 - self._prim

    @property
    def front(self):
        return self._slots[self._prim]

    @property
    def back(self):
        return self._slots[1 - self._prim]

    def flip(self):
        self._prim = 1 - self._prim

    def release(self):
        """Hand both surfaces back, emptying the slots."""
        surfaces = [s for s in self._slots if s is not None]
        self._slots = [None, None]
        return surfaces


class Window:
    """One rectangular text surface.

    Attributes:
        rect: Screen position and size, fixed at creation
        cury, curx: Cursor position relative to the window
        attrs: Attribute word applied to subsequent writes
        keypad_mode: Translate special keys into ``KEY_*`` codes
        nodelay_mode: Reads return at once when no key is pending
        buffers: The window's front/back surfaces, None once destroyed
    """

    def __init__(self, rect: Rect, buffers: Optional[FrameBuffers] = None):
        self.rect = rect
        self.cury = 0
        self.curx = 0
        self.attrs = 0
        self.keypad_mode = False
        self.nodelay_mode = False
        self.buffers = buffers
        self.destroyed = False

    @property
    def height(self) -> int:
        return self.rect.height

    @property
    def width(self) -> int:
        return self.rect.width

    def __repr__(self):
        state = " destroyed" if self.destroyed else ""
        return f"<Window {self.height}x{self.width} at {self.rect.y},{self.rect.x}{state}>"

    def _usable(self) -> bool:
        if self.destroyed:
            logger.warning("operation on destroyed window %r", self)
            return False
        return True

    def getyx(self) -> Tuple[int, int]:
        return self.cury, self.curx

    def getmaxyx(self) -> Tuple[int, int]:
        return self.height, self.width

    def getbegyx(self) -> Tuple[int, int]:
        return self.rect.y, self.rect.x

    def move(self, y: int, x: int) -> Status:
        """Move the cursor. Out-of-range positions are rejected without effect."""
        if not self._usable():
            return INVALID
        if not self.rect.contains(y, x):
            return ERR
        self.cury, self.curx = y, x
        return OK

    def keypad(self, flag: bool) -> Status:
        if not self._usable():
            return INVALID
        self.keypad_mode = bool(flag)
        return OK

    def nodelay(self, flag: bool) -> Status:
        if not self._usable():
            return INVALID
        self.nodelay_mode = bool(flag)
        return OK

    def attron(self, attrs: int) -> Status:
        if not self._usable():
            return INVALID
        self.attrs |= attrs
        return OK

    def attroff(self, attrs: int) -> Status:
        if not self._usable():
            return INVALID
        self.attrs &= ~attrs
        return OK

    def attrset(self, attrs: int) -> Status:
        if not self._usable():
            return INVALID
        self.attrs = attrs
        return OK

    def destroy(self):
        """Mark the window unusable and return its surfaces for release."""
        self.destroyed = True
        surfaces = self.buffers.release() if self.buffers else []
        self.buffers = None
        return surfaces
