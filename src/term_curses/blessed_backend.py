"""
Display backend and input source built on the Blessed library.

Surfaces are kept in memory exactly as :class:`MemoryBackend` keeps them;
publishing one renders it to the terminal, emitting only the cells that
differ from what was drawn last.
"""

import contextlib
import logging
from typing import Optional

from blessed import Terminal

from .attributes import (
    BACKGROUND_SHIFT,
    COMMON_LVB_REVERSE_VIDEO,
    COMMON_LVB_UNDERSCORE,
    FOREGROUND_BLUE,
    FOREGROUND_GREEN,
    FOREGROUND_INTENSITY,
    FOREGROUND_RED,
)
from .backend import (
    ENABLE_ECHO_INPUT,
    ENABLE_LINE_INPUT,
    ENABLE_PROCESSED_INPUT,
    InputSource,
    MemoryBackend,
)
from .errors import BackendError
from . import keys
from .keys import RawEvent
from .screen import Screen

logger = logging.getLogger(__name__)

# Blessed key names and the virtual key each one stands for.
BLESSED_VKEYS = {
    'KEY_UP': keys.VK_UP,
    'KEY_DOWN': keys.VK_DOWN,
    'KEY_LEFT': keys.VK_LEFT,
    'KEY_RIGHT': keys.VK_RIGHT,
    'KEY_HOME': keys.VK_HOME,
    'KEY_END': keys.VK_END,
    'KEY_PGUP': keys.VK_PRIOR,
    'KEY_PGDOWN': keys.VK_NEXT,
    'KEY_INSERT': keys.VK_INSERT,
    'KEY_DELETE': keys.VK_DELETE,
    'KEY_ENTER': keys.VK_RETURN,
    'KEY_BACKSPACE': keys.VK_BACK,
    'KEY_ESCAPE': keys.VK_ESCAPE,
    'KEY_TAB': keys.VK_TAB,
    'KEY_CENTER': keys.VK_CLEAR,
}
BLESSED_VKEYS.update({f'KEY_F{n}': keys.VK_F(n) for n in range(1, 25)})


def ansi_color(nibble: int) -> int:
    """Convert a 4-bit device color (B, G, R, intensity) to an ANSI color number."""
    color = ((1 if nibble & FOREGROUND_RED else 0) |
             (2 if nibble & FOREGROUND_GREEN else 0) |
             (4 if nibble & FOREGROUND_BLUE else 0))
    if nibble & FOREGROUND_INTENSITY:
        color += 8
    return color


def _emit(text):
    """Send escape sequences and text to the terminal."""
    try:
        print(text, end='', flush=True)
    except OSError as exc:
        raise BackendError(f"terminal write failed: {exc}") from exc


class BlessedBackend(MemoryBackend):
    """Renders published surfaces onto a Blessed terminal.

    Attributes:
        term: Blessed Terminal instance
    """

    def __init__(self, term: Optional[Terminal] = None):
        if term is None:
            term = Terminal()
        self.term = term
        super().__init__(term.height, term.width)
        self._frame = None
        self._styles = {}
        self._stack = contextlib.ExitStack()

    def open(self):
        try:
            self._stack.enter_context(self.term.fullscreen())
        except OSError as exc:
            raise BackendError(f"cannot enter fullscreen mode: {exc}") from exc
        self._frame = None
        _emit(self.term.home + self.term.clear)

    def close(self):
        try:
            _emit(self.term.normal + self.term.normal_cursor)
        finally:
            try:
                self._stack.close()
            except OSError as exc:
                raise BackendError(f"cannot leave fullscreen mode: {exc}") from exc

    def query_geometry(self):
        self.rows, self.cols = self.term.height, self.term.width
        return self.rows, self.cols

    def _style(self, mask):
        """Escape sequence selecting the look of a device mask."""
        style = self._styles.get(mask)
        if style is None:
            style = (
                self.term.normal +
                self.term.color(ansi_color(mask & 0xF)) +
                self.term.on_color(ansi_color((mask >> BACKGROUND_SHIFT) & 0xF))
            )
            if mask & COMMON_LVB_REVERSE_VIDEO:
                style += self.term.reverse
            if mask & COMMON_LVB_UNDERSCORE:
                style += self.term.underline
            self._styles[mask] = style
        return style

    def _frame_fits(self):
        return (self._frame is not None and len(self._frame) == self.rows and
                all(len(row) == self.cols for row in self._frame))

    def publish(self, surface):
        super().publish(surface)
        if not self._frame_fits():
            self._frame = [[None] * self.cols for _ in range(self.rows)]

        top, left = surface.rect.y, surface.rect.x
        buf = []
        drawn = []
        last_mask = None
        for row in range(min(surface.height, self.rows - top)):
            frame_row = self._frame[top + row]
            for col in range(min(surface.width, self.cols - left)):
                cell = surface.cells[row][col]
                if frame_row[left + col] == cell:
                    continue
                ch, mask = cell
                buf.append(self.term.move_yx(top + row, left + col))
                if mask != last_mask:
                    buf.append(self._style(mask))
                    last_mask = mask
                buf.append(ch)
                drawn.append((top + row, left + col, cell))
        if buf:
            _emit(''.join(buf))
        # Only cells that reached the terminal count as drawn.
        for row, col, cell in drawn:
            self._frame[row][col] = cell

    def set_cursor(self, surface, row, col):
        super().set_cursor(surface, row, col)
        if surface is self.visible:
            _emit(self.term.move_yx(surface.rect.y + row, surface.rect.x + col))

    def set_cursor_visibility(self, visibility):
        sequence = self.term.hide_cursor if visibility == 0 else self.term.normal_cursor
        _emit(sequence)
        super().set_cursor_visibility(visibility)


class BlessedInput(InputSource):
    """Reads keystrokes from a Blessed terminal as raw events.

    The line and processed input bits map onto Blessed's terminal modes:
    with line input off the terminal is in ``cbreak`` mode, or in ``raw``
    mode when processed input is off as well.
    """

    def __init__(self, term: Optional[Terminal] = None):
        if term is None:
            term = Terminal()
        self.term = term
        self._mode = ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT | ENABLE_ECHO_INPUT
        self._stack = contextlib.ExitStack()

    @property
    def mode(self):
        return self._mode

    def poll_event(self, timeout=None):
        try:
            key = self.term.inkey(timeout=timeout)
        except OSError as exc:
            raise BackendError(f"reading the keyboard failed: {exc}") from exc
        if not key:
            return None
        return RawEvent(
            key_down=True,
            char=str(key) if len(key) == 1 else None,
            vkey=BLESSED_VKEYS.get(key.name) if key.name else None,
        )

    def set_mode_bits(self, mask):
        self._apply(self._mode | mask)

    def clear_mode_bits(self, mask):
        self._apply(self._mode & ~mask)

    def _apply(self, mode):
        bits = ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT
        if self._mode & bits == mode & bits:
            self._mode = mode
            return
        try:
            self._stack.close()
            self._stack = contextlib.ExitStack()
            if not mode & ENABLE_LINE_INPUT:
                if mode & ENABLE_PROCESSED_INPUT:
                    self._stack.enter_context(self.term.cbreak())
                else:
                    self._stack.enter_context(self.term.raw())
        except OSError as exc:
            raise BackendError(f"cannot set terminal input mode {mode:#x}: {exc}") from exc
        self._mode = mode
        logger.debug("terminal input mode %#x", mode)

    def close(self):
        try:
            self._stack.close()
        except OSError as exc:
            raise BackendError(f"cannot restore terminal input mode: {exc}") from exc




def initscr(term: Optional[Terminal] = None, config=None) -> Screen:
    """Open a screen on a Blessed terminal."""
    if term is None:
        term = Terminal()
    return Screen(BlessedBackend(term), BlessedInput(term), config)


def wrapper(fn, *args, term: Optional[Terminal] = None, config=None, **kwargs):
    """Call ``fn(screen, *args, **kwargs)`` and always restore the terminal."""
    screen = initscr(term, config)
    try:
        return fn(screen, *args, **kwargs)
    finally:
        if not screen.closed:
            screen.endwin()
