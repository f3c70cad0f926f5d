"""
Double-buffered rendering.

Every window draws into the surface playing the *back* role while the
*front* surface stays on display. :meth:`DisplayEngine.refresh` publishes
the back surface, copies it onto the other surface so that both hold the
same picture, then swaps roles. The copy step is what keeps content from
flickering between the two physical surfaces: without it, cells drawn
before the previous refresh would vanish whenever the older surface came
back into view.
"""

import logging
from typing import Optional, Union

from .attributes import AttributeCodec
from .backend import BLANK, DisplayBackend
from .colors import ColorTable
from .errors import BackendError, ERR, INVALID, OK, Status
from .geometry import Rect
from .window import FrameBuffers, Window

logger = logging.getLogger(__name__)

CURSOR_INVISIBLE = 0
CURSOR_NORMAL = 1
CURSOR_VERY_VISIBLE = 2


class DisplayEngine:
    """Writes characters into windows and commits them to the display.

    Attributes:
        backend: The display backend owning every surface
        codec: Attribute-word layout
        colors: Color table consulted when computing device masks
        cursor_visibility: Current cursor visibility (0, 1 or 2)
    """

    def __init__(self, backend: DisplayBackend, codec: AttributeCodec, colors: ColorTable):
        self.backend = backend
        self.codec = codec
        self.colors = colors
        self.cursor_visibility = CURSOR_NORMAL

    @staticmethod
    def valid(win: Optional[Window]) -> bool:
        if win is None:
            logger.warning("operation on a null window")
            return False
        if win.destroyed:
            logger.warning("operation on destroyed window %r", win)
            return False
        return True

    def create_window(self, rect: Rect) -> Window:
        """Allocate a window with two cleared surfaces.

        Raises BackendError if the backend cannot provide the surfaces.
        """
        first = self.backend.create_surface(rect)
        try:
            second = self.backend.create_surface(rect)
        except BackendError:
            self.backend.release_surface(first)
            raise
        self.backend.fill(first, BLANK, 0)
        self.backend.fill(second, BLANK, 0)
        win = Window(rect, FrameBuffers(first, second))
        logger.debug("created %r", win)
        return win

    def destroy_window(self, win: Optional[Window]) -> Status:
        """Tear a window down, releasing both surfaces."""
        if not self.valid(win):
            return INVALID
        status = OK
        for surface in win.destroy():
            try:
                self.backend.release_surface(surface)
            except BackendError as exc:
                logger.error("releasing %r: %s", surface, exc)
                status = ERR
        logger.debug("destroyed %r", win)
        return status

    def addch(self, win: Optional[Window], ch: Union[str, int], attr: Optional[int] = None) -> Status:
        """Write one character at the cursor and advance it.

        ``'\\r'`` returns to column 0 and ``'\\n'`` also moves down a row;
        neither writes a cell. After the last column the cursor wraps to
        the start of the next row, which may lie one past the bottom of
        the window. From there only a carriage return or a successful move
        is accepted. Anything but a single character is rejected.
        """
        if not self.valid(win):
            return INVALID
        if isinstance(ch, int):
            try:
                ch = chr(ch)
            except (ValueError, OverflowError):
                return ERR
        if len(ch) != 1:
            return ERR

        if ch == "\r":
            win.curx = 0
            return OK
        if win.cury >= win.height:
            return ERR
        if ch == "\n":
            win.curx = 0
            win.cury += 1
            return OK

        mask = self.codec.to_device_mask(win.attrs if attr is None else attr, self.colors)
        try:
            self.backend.write_cell(win.buffers.back, win.cury, win.curx, ch, mask)
        except BackendError as exc:
            logger.error("write at (%d, %d) failed: %s", win.cury, win.curx, exc)
            return ERR

        win.curx += 1
        if win.curx >= win.width:
            win.curx = 0
            win.cury += 1
        return OK

    def addstr(self, win: Optional[Window], text: str, attr: Optional[int] = None) -> Status:
        """Write a string one character at a time, stopping at the first failure."""
        for ch in text:
            status = self.addch(win, ch, attr)
            if not status:
                return status
        return OK if self.valid(win) else INVALID

    def clear(self, win: Optional[Window]) -> Status:
        """Blank the back surface and home the cursor."""
        if not self.valid(win):
            return INVALID
        try:
            self.backend.fill(win.buffers.back, BLANK,
                              self.codec.to_device_mask(win.attrs, self.colors))
        except BackendError as exc:
            logger.error("clearing %r failed: %s", win, exc)
            return ERR
        win.cury = win.curx = 0
        return OK

    def refresh(self, win: Optional[Window]) -> Status:
        """Publish the window's back surface and swap roles.

        The just-published surface is copied onto the other one before the
        swap, so the new back surface starts as an exact copy of what is on
        display. A failed copy is reported but the swap still happens; a
        failed publish leaves the roles as they were.
        """
        if not self.valid(win):
            return INVALID
        buffers = win.buffers
        shown, behind = buffers.back, buffers.front

        try:
            self.backend.publish(shown)
        except BackendError as exc:
            logger.error("publishing %r failed: %s", win, exc)
            return ERR

        status = OK
        try:
            self.backend.set_cursor(shown, min(win.cury, win.height - 1), win.curx)
        except BackendError as exc:
            logger.error("placing cursor for %r failed: %s", win, exc)
            status = ERR

        full = Rect(0, 0, win.height, win.width)
        try:
            cells = self.backend.read_region(shown, full)
            self.backend.write_region(behind, full, cells)
        except BackendError as exc:
            logger.error("copying %r forward failed: %s", win, exc)
            status = ERR

        buffers.flip()
        logger.debug("refreshed %r, visible slot now %d", win, buffers.prim)
        return status

    def curs_set(self, visibility: int) -> Union[int, Status]:
        """Set cursor visibility and return the previous setting, or ERR."""
        if visibility not in (CURSOR_INVISIBLE, CURSOR_NORMAL, CURSOR_VERY_VISIBLE):
            return ERR
        try:
            self.backend.set_cursor_visibility(visibility)
        except BackendError as exc:
            logger.error("setting cursor visibility failed: %s", exc)
            return ERR
        previous, self.cursor_visibility = self.cursor_visibility, visibility
        return previous
