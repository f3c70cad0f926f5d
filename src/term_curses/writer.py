"""Bounded formatted output."""

import logging
from typing import Callable, Optional

from .engine import DisplayEngine
from .errors import ERR, INVALID, OK, Status
from .window import Window

logger = logging.getLogger(__name__)


class FormattedWriter:
    """Renders ``%``-style templates and feeds the result to the write primitive.

    The rendered text may not exceed a scratch capacity measured in cells.
    With ``sizing="target"`` that is the target window's size; with
    ``sizing="standard"`` it is the standard window's, whatever window is
    being written to.
    """

    def __init__(self, engine: DisplayEngine, standard: Callable[[], Optional[Window]],
                 sizing: str = "target"):
        self.engine = engine
        self._standard = standard
        self.sizing = sizing

    def capacity(self, win: Window) -> int:
        anchor = self._standard() if self.sizing == "standard" else win
        if anchor is None or anchor.destroyed:
            return 0
        return anchor.height * anchor.width

    def render(self, win: Window, template: str, args: tuple) -> Optional[str]:
        """Format ``template`` against ``args``; None if it fails or does not fit.

        The template is always rendered, so ``%%`` gives ``%`` and a stray
        conversion fails even when no arguments are passed.
        """
        if len(args) == 1 and isinstance(args[0], dict):
            args = args[0]
        try:
            text = template % args
        except (TypeError, ValueError, KeyError) as exc:
            logger.error("cannot format %r: %s", template, exc)
            return None
        limit = self.capacity(win)
        if len(text) > limit:
            logger.error("formatted output of %d characters exceeds %d cells", len(text), limit)
            return None
        return text

    def printw(self, win: Optional[Window], template: str, *args) -> Status:
        if win is None or win.destroyed:
            return INVALID
        text = self.render(win, template, args)
        if text is None:
            return ERR
        for ch in text:
            status = self.engine.addch(win, ch)
            if not status:
                return status
        return OK

    def mvprintw(self, win: Optional[Window], y: int, x: int, template: str, *args) -> Status:
        """Move, then print. On a failed print the cursor goes back where it was."""
        if win is None or win.destroyed:
            return INVALID
        saved = win.getyx()
        status = win.move(y, x)
        if not status:
            return status
        status = self.printw(win, template, *args)
        if not status:
            win.cury, win.curx = saved
        return status
