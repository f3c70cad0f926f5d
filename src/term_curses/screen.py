"""
The screen context.

A :class:`Screen` gathers everything a curses program treats as global:
the display backend, the input source, the color table, the echo flag and
the standard window. Each screen is independent, so tests can build as
many as they like. A screen is not thread-safe. One thread drives all
window, display and input calls.

Most methods are thin wrappers that keep the familiar curses names, with
the ``w`` variants taking the target window explicitly.
"""

import logging
from typing import List, Optional, Tuple, Union

from blessed.keyboard import Keystroke

from .attributes import AttributeCodec
from .backend import (
    ENABLE_LINE_INPUT,
    ENABLE_PROCESSED_INPUT,
    DisplayBackend,
    InputSource,
)
from .colors import ColorTable
from .config import ScreenConfig
from .engine import DisplayEngine
from .errors import BackendError, ERR, INVALID, OK, Status
from .geometry import ConstrainedRect, Placement, Rect
from .keys import KeyTranslator
from .window import Window
from .writer import FormattedWriter

logger = logging.getLogger(__name__)

NO_KEY = Keystroke("")


class Screen:
    """A curses-style screen drawn through a display backend.

    Creating a screen takes over the display: the geometry is queried, the
    standard window and its two surfaces are created, input is put in raw
    mode and the standard window's front surface is published. Backend
    faults during this setup are fatal and propagate as BackendError.

    Attributes:
        config: Screen configuration
        backend: Display backend
        input: Input source
        colors: Color palette and pairs
        codec: Attribute-word layout
        engine: Write and refresh primitives
        writer: Formatted output
        stdscr: The standard window, valid until :meth:`endwin`
        echo_mode: Whether read characters are echoed to ``stdscr``
    """

    def __init__(self, backend: DisplayBackend, input_source: InputSource,
                 config: Optional[ScreenConfig] = None):
        self.config = config or ScreenConfig()
        self.backend = backend
        self.input = input_source
        self.codec = AttributeCodec.from_config(self.config)
        self.colors = ColorTable(self.config)
        self.translator = KeyTranslator()
        self.engine = DisplayEngine(backend, self.codec, self.colors)
        self.writer = FormattedWriter(self.engine, lambda: self.stdscr, self.config.scratch_sizing)
        self.echo_mode = False
        self.closed = False
        self.windows: List[Window] = []

        try:
            self.backend.open()
            rows, cols = self.backend.query_geometry()
            self.stdscr = self.engine.create_window(Rect(0, 0, rows, cols))
            self.windows.append(self.stdscr)
            self.input.clear_mode_bits(self.input.mode)
            self.backend.publish(self.stdscr.buffers.front)
        except BackendError:
            logger.exception("screen initialization failed")
            for win in self.windows:
                self.engine.destroy_window(win)
            self.windows = []
            self._restore_host()
            raise
        logger.debug("screen open: %d lines, %d columns", rows, cols)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self.closed:
            self.endwin()

    @property
    def LINES(self) -> int:
        return self.stdscr.height

    @property
    def COLS(self) -> int:
        return self.stdscr.width

    def _restore_host(self) -> bool:
        """Give input and display back to the host; False if either fails."""
        restored = True
        for part in (self.input, self.backend):
            try:
                part.close()
            except BackendError as exc:
                logger.error("restoring the terminal failed: %s", exc)
                restored = False
        return restored

    # --- Lifetime ---

    def newwin(self, nlines: Union[int, float] = 0, ncols: Union[int, float] = 0,
               begin_y: Optional[int] = 0, begin_x: Optional[int] = 0) -> Optional[Window]:
        """Create a window placed inside the screen.

        A zero size extends to the screen edge, a float size is a fraction of
        the room available and a None origin centers the window. Returns
        None if the backend cannot supply the surfaces.
        """
        if self.closed:
            return None
        placement = ConstrainedRect(
            Placement(begin_y, begin_x, nlines, ncols),
            Rect(0, 0, self.LINES, self.COLS),
        )
        try:
            win = self.engine.create_window(placement.rect())
        except BackendError as exc:
            logger.error("newwin failed: %s", exc)
            return None
        self.windows.append(win)
        return win

    def delwin(self, win: Optional[Window]) -> Status:
        """Destroy a window. The standard window lives until :meth:`endwin`."""
        if win is self.stdscr and not self.closed:
            return ERR
        status = self.engine.destroy_window(win)
        if win in self.windows:
            self.windows.remove(win)
        return status

    def endwin(self) -> Status:
        """Tear every window down and give the display back."""
        if self.closed:
            return ERR
        status = OK
        for win in reversed(self.windows):
            if not self.engine.destroy_window(win):
                status = ERR
        self.windows = []
        self.closed = True
        if not self._restore_host():
            status = ERR
        logger.debug("screen closed")
        return status

    # --- Output ---

    def waddch(self, win, ch, attr=None) -> Status:
        return self.engine.addch(win, ch, attr)

    def addch(self, ch, attr=None) -> Status:
        return self.engine.addch(self.stdscr, ch, attr)

    def mvwaddch(self, win, y, x, ch, attr=None) -> Status:
        if win is None:
            return INVALID
        status = win.move(y, x)
        if not status:
            return status
        return self.engine.addch(win, ch, attr)

    def mvaddch(self, y, x, ch, attr=None) -> Status:
        return self.mvwaddch(self.stdscr, y, x, ch, attr)

    def waddstr(self, win, text, attr=None) -> Status:
        return self.engine.addstr(win, text, attr)

    def addstr(self, text, attr=None) -> Status:
        return self.engine.addstr(self.stdscr, text, attr)

    def wprintw(self, win, template, *args) -> Status:
        return self.writer.printw(win, template, *args)

    def printw(self, template, *args) -> Status:
        return self.writer.printw(self.stdscr, template, *args)

    def mvwprintw(self, win, y, x, template, *args) -> Status:
        return self.writer.mvprintw(win, y, x, template, *args)

    def mvprintw(self, y, x, template, *args) -> Status:
        return self.writer.mvprintw(self.stdscr, y, x, template, *args)

    def wclear(self, win) -> Status:
        return self.engine.clear(win)

    def clear(self) -> Status:
        return self.engine.clear(self.stdscr)

    def wrefresh(self, win) -> Status:
        return self.engine.refresh(win)

    def refresh(self) -> Status:
        return self.engine.refresh(self.stdscr)

    def curs_set(self, visibility: int) -> Union[int, Status]:
        return self.engine.curs_set(visibility)

    # --- Cursor and attributes ---

    def wmove(self, win, y, x) -> Status:
        return win.move(y, x) if win is not None else INVALID

    def move(self, y, x) -> Status:
        return self.stdscr.move(y, x)

    def wattron(self, win, attrs) -> Status:
        return win.attron(attrs) if win is not None else INVALID

    def wattroff(self, win, attrs) -> Status:
        return win.attroff(attrs) if win is not None else INVALID

    def wattrset(self, win, attrs) -> Status:
        return win.attrset(attrs) if win is not None else INVALID

    def attron(self, attrs) -> Status:
        return self.stdscr.attron(attrs)

    def attroff(self, attrs) -> Status:
        return self.stdscr.attroff(attrs)

    def attrset(self, attrs) -> Status:
        return self.stdscr.attrset(attrs)

    # --- Input ---

    def wgetch(self, win: Optional[Window]) -> Keystroke:
        """Read one key press for ``win``.

        Only key-down events count; anything else is skipped. In no-delay
        mode an empty keystroke comes back at once when nothing is pending,
        otherwise the call blocks. With echo on, the literal character is
        written to the standard window first.
        """
        if not self.engine.valid(win):
            return NO_KEY
        while True:
            timeout = 0 if win.nodelay_mode else self.config.inkey_timeout
            try:
                event = self.input.poll_event(timeout)
            except BackendError as exc:
                logger.error("reading input failed: %s", exc)
                return NO_KEY
            if event is None:
                if win.nodelay_mode:
                    return NO_KEY
                continue
            if event.key_down:
                break

        if self.echo_mode and event.char:
            self.engine.addch(self.stdscr, event.char)
        return self.translator.translate(event, win.keypad_mode)

    def getch(self) -> Keystroke:
        return self.wgetch(self.stdscr)

    def mvwgetch(self, win, y, x) -> Keystroke:
        """Move the window's cursor, then read. A failed move reads nothing."""
        if win is None or not win.move(y, x):
            return NO_KEY
        return self.wgetch(win)

    def mvgetch(self, y, x) -> Keystroke:
        return self.mvwgetch(self.stdscr, y, x)

    # --- Input modes ---

    def echo(self) -> Status:
        self.echo_mode = True
        return OK

    def noecho(self) -> Status:
        self.echo_mode = False
        return OK

    def keypad(self, win, flag: bool) -> Status:
        return win.keypad(flag) if win is not None else INVALID

    def nodelay(self, win, flag: bool) -> Status:
        return win.nodelay(flag) if win is not None else INVALID

    def _input_mode(self, set_bits=0, clear_bits=0) -> Status:
        try:
            if clear_bits:
                self.input.clear_mode_bits(clear_bits)
            if set_bits:
                self.input.set_mode_bits(set_bits)
        except BackendError as exc:
            logger.error("changing input mode failed: %s", exc)
            return ERR
        logger.debug("input mode now %#x", self.input.mode)
        return OK

    def cbreak(self) -> Status:
        """Character-at-a-time input; interrupt keys still generate signals."""
        return self._input_mode(set_bits=ENABLE_PROCESSED_INPUT, clear_bits=ENABLE_LINE_INPUT)

    def nocbreak(self) -> Status:
        return self._input_mode(set_bits=ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT)

    def raw(self) -> Status:
        """Character-at-a-time input with no signal processing."""
        return self._input_mode(clear_bits=ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT)

    def noraw(self) -> Status:
        return self._input_mode(set_bits=ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT)

    # --- Colors ---

    def has_colors(self) -> bool:
        return self.colors.has_colors()

    def can_change_color(self) -> bool:
        return self.colors.can_change_color()

    def start_color(self) -> Status:
        """Enter color mode and reset the standard window to pair 0."""
        status = self.colors.start_color()
        if status and not self.closed:
            self.stdscr.attrset(self.codec.color_pair(0))
        return status

    def init_color(self, color, r, g, b) -> Status:
        return self.colors.init_color(color, r, g, b)

    def init_pair(self, pair, fg, bg) -> Status:
        return self.colors.init_pair(pair, fg, bg)

    def color_content(self, color) -> Optional[Tuple[int, int, int]]:
        return self.colors.color_content(color)

    def pair_content(self, pair) -> Optional[Tuple[int, int]]:
        return self.colors.pair_content(pair)

    def color_pair(self, n: int) -> int:
        return self.codec.color_pair(n)

    def pair_number(self, attrs: int) -> int:
        return self.codec.pair_number(attrs)

    @property
    def COLORS(self) -> int:
        return self.colors.colors

    @property
    def COLOR_PAIRS(self) -> int:
        return self.colors.color_pairs
