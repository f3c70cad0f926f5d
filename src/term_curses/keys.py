"""
Logical key codes and the raw-event translator.

Raw events come from an input source as a key-down flag, an optional literal
character and an optional virtual key code. :class:`KeyTranslator` turns them
into :class:`blessed.keyboard.Keystroke` values: a symbolic ``KEY_*`` code
when keypad translation is on and the virtual key is known, otherwise the
literal character.
"""

from dataclasses import dataclass
from typing import Optional

from blessed.keyboard import Keystroke

# Symbolic key codes. Values above 255 cannot collide with characters.
KEY_CODE_YES = 256
KEY_BREAK = 257
KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_HOME = 262
KEY_BACKSPACE = 263
KEY_F0 = 264
KEY_DL = KEY_F0 + 64
KEY_IL = 329
KEY_DC = 330
KEY_IC = 331
KEY_EIC = 332
KEY_CLEAR = 333
KEY_EOS = 334
KEY_EOL = 335
KEY_SF = 336
KEY_SR = 337
KEY_NPAGE = 338
KEY_PPAGE = 339
KEY_STAB = 340
KEY_CTAB = 341
KEY_CATAB = 342
KEY_ENTER = 343
KEY_SRESET = 344
KEY_RESET = 345
KEY_PRINT = 346
KEY_LL = 347
KEY_A1 = 348
KEY_A3 = 349
KEY_B2 = 350
KEY_C1 = 351
KEY_C3 = 352
KEY_BTAB = 353
KEY_BEG = 354
KEY_CANCEL = 355
KEY_CLOSE = 356
KEY_COMMAND = 357
KEY_COPY = 358
KEY_CREATE = 359
KEY_END = 360
KEY_EXIT = 361
KEY_FIND = 362
KEY_HELP = 363
KEY_MARK = 364
KEY_MESSAGE = 365
KEY_MOVE = 366
KEY_NEXT = 367
KEY_OPEN = 368
KEY_OPTIONS = 369
KEY_PREVIOUS = 370
KEY_REDO = 371
KEY_REFERENCE = 372
KEY_REFRESH = 373
KEY_REPLACE = 374
KEY_RESTART = 375
KEY_RESUME = 376
KEY_SAVE = 377
KEY_SBEG = 378
KEY_SCANCEL = 379
KEY_SCOMMAND = 380
KEY_SCOPY = 381
KEY_SCREATE = 382
KEY_SDC = 383
KEY_SDL = 384
KEY_SELECT = 385
KEY_SEND = 386
KEY_SEOL = 387
KEY_SEXIT = 388
KEY_SFIND = 389
KEY_SHELP = 390
KEY_SHOME = 391
KEY_SIC = 392
KEY_SLEFT = 393
KEY_SMESSAGE = 394
KEY_SMOVE = 395
KEY_SNEXT = 396
KEY_SOPTIONS = 397
KEY_SPREVIOUS = 398
KEY_SPRINT = 399
KEY_SREDO = 400
KEY_SREPLACE = 401
KEY_SRIGHT = 402
KEY_SRSUME = 403
KEY_SSAVE = 404
KEY_SSUSPEND = 405
KEY_SUNDO = 406
KEY_SUSPEND = 407
KEY_UNDO = 408

KEY_MAX = KEY_UNDO


def KEY_F(n: int) -> int:
    """Code of function key ``n``."""
    return KEY_F0 + n


KEY_NAMES = {
    value: name for name, value in list(globals().items())
    if name.startswith("KEY_") and isinstance(value, int) and name != "KEY_MAX"
}
KEY_NAMES.update({KEY_F(n): f"KEY_F{n}" for n in range(64)})


def key_name(code: int) -> Optional[str]:
    """Return the ``KEY_*`` name of a symbolic code, or None."""
    return KEY_NAMES.get(code)


# Virtual key codes reported by the input source.
VK_CANCEL = 0x03
VK_BACK = 0x08
VK_TAB = 0x09
VK_CLEAR = 0x0C
VK_RETURN = 0x0D
VK_SHIFT = 0x10
VK_CONTROL = 0x11
VK_ESCAPE = 0x1B
VK_SPACE = 0x20
VK_PRIOR = 0x21
VK_NEXT = 0x22
VK_END = 0x23
VK_HOME = 0x24
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28
VK_SELECT = 0x29
VK_PRINT = 0x2A
VK_INSERT = 0x2D
VK_DELETE = 0x2E
VK_HELP = 0x2F
VK_NUMPAD0 = 0x60
VK_NUMPAD1 = 0x61
VK_NUMPAD2 = 0x62
VK_NUMPAD3 = 0x63
VK_NUMPAD4 = 0x64
VK_NUMPAD5 = 0x65
VK_NUMPAD6 = 0x66
VK_NUMPAD7 = 0x67
VK_NUMPAD8 = 0x68
VK_NUMPAD9 = 0x69
VK_F1 = 0x70


def VK_F(n: int) -> int:
    """Virtual key code of function key ``n`` (1 to 24)."""
    return VK_F1 + n - 1


# Keypad translation table. Each virtual key appears exactly once.
KEYPAD_MAP = {
    VK_ESCAPE: KEY_EXIT,
    VK_CANCEL: KEY_CANCEL,
    VK_BACK: KEY_BACKSPACE,
    VK_CLEAR: KEY_CLEAR,
    VK_RETURN: KEY_ENTER,
    VK_CONTROL: KEY_COMMAND,
    VK_PRIOR: KEY_PPAGE,
    VK_NEXT: KEY_NPAGE,
    VK_END: KEY_END,
    VK_HOME: KEY_HOME,
    VK_LEFT: KEY_LEFT,
    VK_UP: KEY_UP,
    VK_RIGHT: KEY_RIGHT,
    VK_DOWN: KEY_DOWN,
    VK_SELECT: KEY_SELECT,
    VK_PRINT: KEY_PRINT,
    VK_DELETE: KEY_DC,
    VK_HELP: KEY_HELP,
    # Numeric keypad, laid out as A1 UP A3 / LEFT B2 RIGHT / C1 DOWN C3
    VK_NUMPAD1: KEY_C1,
    VK_NUMPAD2: KEY_DOWN,
    VK_NUMPAD3: KEY_C3,
    VK_NUMPAD4: KEY_LEFT,
    VK_NUMPAD5: KEY_B2,
    VK_NUMPAD6: KEY_RIGHT,
    VK_NUMPAD7: KEY_A1,
    VK_NUMPAD8: KEY_UP,
    VK_NUMPAD9: KEY_A3,
}
KEYPAD_MAP.update({VK_F(n): KEY_F(n) for n in range(1, 25)})


@dataclass
class RawEvent:
    """One event from an input source.

    Attributes:
        key_down: True for a key press, False for a release or a non-key event
        char: Literal character carried by the event, if any
        vkey: Virtual key code, if any
    """
    key_down: bool = True
    char: Optional[str] = None
    vkey: Optional[int] = None


class KeyTranslator:
    """Maps raw events to keystrokes."""

    def __init__(self, table=None):
        self.table = KEYPAD_MAP if table is None else table

    def translate(self, event: RawEvent, keypad: bool = False) -> Keystroke:
        """Translate one key-down event.

        With ``keypad`` set, a virtual key found in the table yields a
        keystroke carrying the symbolic code and name. Anything else yields
        the literal character, or NUL when the event carries none.
        """
        char = event.char or "\x00"
        if keypad and event.vkey is not None:
            code = self.table.get(event.vkey)
            if code is not None:
                return Keystroke(char, code, key_name(code))
        return Keystroke(char)
