"""
Result codes and exceptions.

Window, attribute and color operations report their outcome through
:class:`Status` instead of raising. Only collaborator faults are exceptions.
"""

import enum


class Status(enum.Enum):
    """Outcome of a screen operation.

    ``OK`` is the only truthy member, so callers can write ``if win.move(y, x):``.
    ``INVALID`` means the operation targeted a ``None`` or torn-down window,
    which is a programming error rather than a runtime failure.
    """
    OK = "ok"
    ERR = "err"
    INVALID = "invalid"

    def __bool__(self):
        return self is Status.OK


OK = Status.OK
ERR = Status.ERR
INVALID = Status.INVALID


class BackendError(RuntimeError):
    """Raised by a display backend or input source when the host fails."""
