"""
Collaborator contracts: the display backend and the input source.

The core never talks to the terminal directly. It draws onto *surfaces*
handed out by a :class:`DisplayBackend`, asks the backend to publish one of
them, and reads :class:`~term_curses.keys.RawEvent` values from an
:class:`InputSource`. Both report host failures by raising
:class:`~term_curses.errors.BackendError`.

:class:`MemoryBackend` and :class:`ScriptedInput` implement the contracts
in-process. They serve tests and headless use, and the blessed-based
backend builds on the same surfaces.
"""

import abc
import collections
from typing import Iterable, List, Optional, Tuple

from .errors import BackendError
from .geometry import Rect
from .keys import RawEvent

# Background character used when a surface is cleared.
BLANK = " "

# Input mode bits understood by InputSource.set_mode_bits/clear_mode_bits.
ENABLE_PROCESSED_INPUT = 0x0001
ENABLE_LINE_INPUT = 0x0002
ENABLE_ECHO_INPUT = 0x0004

Cell = Tuple[str, int]


class Surface:
    """A rectangular grid of ``(char, device_mask)`` cells.

    The surface remembers where on screen it is shown (``rect.y``,
    ``rect.x``) and where its hardware cursor sits.
    """

    def __init__(self, rect: Rect, mask: int = 0):
        self.rect = rect
        self.cursor = (0, 0)
        self.released = False
        self.cells: List[List[Cell]] = [
            [(BLANK, mask)] * rect.width for _ in range(rect.height)
        ]

    @property
    def height(self):
        return self.rect.height

    @property
    def width(self):
        return self.rect.width

    def text(self, row) -> str:
        """Characters of one row, for inspection."""
        return "".join(ch for ch, _ in self.cells[row])

    def __repr__(self):
        return f"Surface({self.rect.height}x{self.rect.width} at {self.rect.y},{self.rect.x})"


class DisplayBackend(abc.ABC):
    """Host display: owns surfaces and decides which one is visible."""

    def open(self):
        """Take over the display. Called once before the first surface is created."""

    def close(self):
        """Give the display back to the host."""

    @abc.abstractmethod
    def query_geometry(self) -> Tuple[int, int]:
        """Return the display size as (rows, cols)."""

    @abc.abstractmethod
    def create_surface(self, rect: Rect) -> Surface:
        ...

    @abc.abstractmethod
    def release_surface(self, surface: Surface):
        ...

    @abc.abstractmethod
    def publish(self, surface: Surface):
        """Make ``surface`` the visible one."""

    @abc.abstractmethod
    def write_cell(self, surface: Surface, row: int, col: int, char: str, mask: int):
        ...

    @abc.abstractmethod
    def read_region(self, surface: Surface, rect: Rect) -> List[List[Cell]]:
        ...

    @abc.abstractmethod
    def write_region(self, surface: Surface, rect: Rect, cells: List[List[Cell]]):
        ...

    @abc.abstractmethod
    def fill(self, surface: Surface, char: str = BLANK, mask: int = 0):
        ...

    @abc.abstractmethod
    def set_cursor(self, surface: Surface, row: int, col: int):
        ...

    @abc.abstractmethod
    def set_cursor_visibility(self, visibility: int):
        """Set the cursor to invisible (0), normal (1) or very visible (2)."""


class MemoryBackend(DisplayBackend):
    """A display held entirely in memory.

    Attributes:
        rows, cols: Size reported by :meth:`query_geometry`
        visible: The most recently published surface
        cursor_visibility: Last visibility set, 1 initially
        surfaces: Every surface created and not yet released
    """

    def __init__(self, rows=24, cols=80):
        self.rows = rows
        self.cols = cols
        self.visible: Optional[Surface] = None
        self.cursor_visibility = 1
        self.surfaces: List[Surface] = []

    def query_geometry(self):
        return self.rows, self.cols

    def _check(self, surface):
        if surface is None or surface.released:
            raise BackendError(f"invalid surface {surface!r}")

    def _check_rect(self, surface, rect):
        if (rect.y < 0 or rect.x < 0 or
                rect.y + rect.height > surface.height or
                rect.x + rect.width > surface.width):
            raise BackendError(f"region {rect} outside {surface!r}")

    def create_surface(self, rect):
        if rect.height <= 0 or rect.width <= 0:
            raise BackendError(f"cannot create a {rect.height}x{rect.width} surface")
        surface = Surface(rect)
        self.surfaces.append(surface)
        return surface

    def release_surface(self, surface):
        self._check(surface)
        surface.released = True
        self.surfaces.remove(surface)
        if self.visible is surface:
            self.visible = None

    def publish(self, surface):
        self._check(surface)
        self.visible = surface

    def write_cell(self, surface, row, col, char, mask):
        self._check(surface)
        if not surface.rect.contains(row, col):
            raise BackendError(f"cell ({row}, {col}) outside {surface!r}")
        surface.cells[row][col] = (char, mask)

    def read_region(self, surface, rect):
        self._check(surface)
        self._check_rect(surface, rect)
        return [surface.cells[row][rect.x:rect.x + rect.width]
                for row in range(rect.y, rect.y + rect.height)]

    def write_region(self, surface, rect, cells):
        self._check(surface)
        self._check_rect(surface, rect)
        for offset, row in enumerate(cells[:rect.height]):
            target = surface.cells[rect.y + offset]
            target[rect.x:rect.x + rect.width] = row[:rect.width]

    def fill(self, surface, char=BLANK, mask=0):
        self._check(surface)
        for row in surface.cells:
            row[:] = [(char, mask)] * len(row)

    def set_cursor(self, surface, row, col):
        self._check(surface)
        surface.cursor = (row, col)

    def set_cursor_visibility(self, visibility):
        self.cursor_visibility = visibility


class InputSource(abc.ABC):
    """Host keyboard: raw events plus the line/processed input mode bits."""

    @property
    @abc.abstractmethod
    def mode(self) -> int:
        ...

    @abc.abstractmethod
    def poll_event(self, timeout: Optional[float] = None) -> Optional[RawEvent]:
        """Return the next raw event.

        ``timeout=0`` never blocks and ``None`` waits for an event. Returns
        None when the timeout expires with nothing pending.
        """

    @abc.abstractmethod
    def set_mode_bits(self, mask: int):
        ...

    @abc.abstractmethod
    def clear_mode_bits(self, mask: int):
        ...

    def close(self):
        """Restore the host's input mode."""


class ScriptedInput(InputSource):
    """Input source fed from a list of prepared events.

    A blocking poll on an exhausted script raises BackendError, since
    nothing could ever arrive.
    """

    def __init__(self, events: Iterable[RawEvent] = ()):
        self.events = collections.deque(events)
        self._mode = ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT | ENABLE_ECHO_INPUT

    @property
    def mode(self):
        return self._mode

    def feed(self, *events: RawEvent):
        self.events.extend(events)

    def poll_event(self, timeout=None):
        if self.events:
            return self.events.popleft()
        if timeout is None:
            raise BackendError("blocking read on an exhausted input script")
        return None

    def set_mode_bits(self, mask):
        self._mode |= mask

    def clear_mode_bits(self, mask):
        self._mode &= ~mask
