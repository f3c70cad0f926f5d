"""Tests for the Blessed backend and input source."""

import pytest
from unittest.mock import MagicMock, Mock, patch
from blessed import Terminal
from blessed.keyboard import Keystroke
from term_curses import (
    BackendError,
    BlessedBackend,
    BlessedInput,
    ERR,
    OK,
    Rect,
    Screen,
    ScriptedInput,
    wrapper,
)
from term_curses import keys
from term_curses.attributes import (
    COMMON_LVB_REVERSE_VIDEO,
    COMMON_LVB_UNDERSCORE,
    FOREGROUND_BLUE,
    FOREGROUND_INTENSITY,
    FOREGROUND_RED,
)
from term_curses.backend import ENABLE_LINE_INPUT, ENABLE_PROCESSED_INPUT
from term_curses.blessed_backend import ansi_color


def create_mock_terminal(width=4, height=3, keystrokes=()):
    """Create a mock Terminal whose sequences are readable markers."""
    term = Mock(spec=Terminal)
    term.width = width
    term.height = height
    term.move_yx = Mock(side_effect=lambda y, x: f'<{y},{x}>')
    term.color = Mock(side_effect=lambda n: f'[fg{n}]')
    term.on_color = Mock(side_effect=lambda n: f'[bg{n}]')
    term.normal = ''
    term.reverse = '[rev]'
    term.underline = '[ul]'
    term.hide_cursor = '[hide]'
    term.normal_cursor = '[show]'
    term.home = '[home]'
    term.clear = '[clear]'
    term.fullscreen = MagicMock()
    term.cbreak = MagicMock()
    term.raw = MagicMock()
    term.inkey = Mock(side_effect=list(keystrokes) or None, return_value=Keystroke(''))
    return term


def printed(mock_print):
    return ''.join(call.args[0] for call in mock_print.call_args_list)


class TestAnsiColor:
    """Tests for converting device color nibbles."""

    @pytest.mark.parametrize("nibble, color", [
        (0, 0),
        (FOREGROUND_RED, 1),
        (FOREGROUND_BLUE, 4),
        (FOREGROUND_RED | FOREGROUND_BLUE, 5),
        (0x7, 7),
        (FOREGROUND_RED | FOREGROUND_INTENSITY, 9),
        (0xF, 15),
    ])
    def test_nibbles(self, nibble, color):
        """Test that each channel lands on the matching ANSI bit."""
        assert ansi_color(nibble) == color


class TestBlessedBackend:
    """Tests for rendering surfaces."""

    @patch('builtins.print')
    def test_open_and_close(self, mock_print):
        """Test that the backend enters and leaves fullscreen mode."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        backend.open()
        term.fullscreen.return_value.__enter__.assert_called_once()
        assert '[home][clear]' in printed(mock_print)

        backend.close()
        term.fullscreen.return_value.__exit__.assert_called_once()
        assert printed(mock_print).endswith('[show]')

    def test_geometry(self):
        """Test that the geometry comes from the terminal."""
        term = create_mock_terminal(width=100, height=40)
        assert BlessedBackend(term).query_geometry() == (40, 100)

    @patch('builtins.print')
    def test_publish_draws_every_cell_once(self, mock_print):
        """Test that the first publish draws the whole surface."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        surface = backend.create_surface(Rect(0, 0, 1, 2))
        backend.write_cell(surface, 0, 1, 'X', 0)

        backend.publish(surface)
        assert printed(mock_print) == '<0,0>[fg0][bg0] <0,1>X'
        assert backend.visible is surface

    @patch('builtins.print')
    def test_publish_draws_only_changes(self, mock_print):
        """Test that unchanged cells are not redrawn."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        surface = backend.create_surface(Rect(0, 0, 2, 3))
        backend.publish(surface)
        mock_print.reset_mock()

        backend.publish(surface)
        mock_print.assert_not_called()

        backend.write_cell(surface, 1, 2, 'Z', 0)
        backend.publish(surface)
        assert printed(mock_print) == '<1,2>[fg0][bg0]Z'

    @patch('builtins.print')
    def test_publish_offset_surface(self, mock_print):
        """Test that surfaces are drawn at their screen origin."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        surface = backend.create_surface(Rect(2, 3, 1, 1))
        backend.write_cell(surface, 0, 0, 'o', 0)
        backend.publish(surface)
        assert printed(mock_print) == '<2,3>[fg0][bg0]o'

    @patch('builtins.print')
    def test_styles(self, mock_print):
        """Test that colors, reverse video and underline are rendered."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        surface = backend.create_surface(Rect(0, 0, 1, 1))
        mask = FOREGROUND_RED | (FOREGROUND_BLUE << 4) | COMMON_LVB_REVERSE_VIDEO | COMMON_LVB_UNDERSCORE
        backend.write_cell(surface, 0, 0, 's', mask)
        backend.publish(surface)
        assert printed(mock_print) == '<0,0>[fg1][bg4][rev][ul]s'

    @patch('builtins.print')
    def test_cursor(self, mock_print):
        """Test that the cursor is only moved on the visible surface."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        hidden = backend.create_surface(Rect(0, 0, 3, 4))
        shown = backend.create_surface(Rect(0, 0, 3, 4))
        backend.publish(shown)
        mock_print.reset_mock()

        backend.set_cursor(hidden, 1, 1)
        mock_print.assert_not_called()
        backend.set_cursor(shown, 2, 3)
        assert printed(mock_print) == '<2,3>'
        assert shown.cursor == (2, 3)

    @patch('builtins.print')
    def test_cursor_visibility(self, mock_print):
        """Test hiding and showing the cursor."""
        backend = BlessedBackend(create_mock_terminal())
        backend.set_cursor_visibility(0)
        backend.set_cursor_visibility(2)
        assert printed(mock_print) == '[hide][show]'
        assert backend.cursor_visibility == 2

    @patch('builtins.print')
    def test_publish_after_width_change(self, mock_print):
        """Test that a wider terminal gets a fresh frame to diff against."""
        term = create_mock_terminal(width=4, height=3)
        backend = BlessedBackend(term)
        backend.publish(backend.create_surface(Rect(0, 0, 1, 2)))
        mock_print.reset_mock()

        term.width = 6
        assert backend.query_geometry() == (3, 6)
        backend.publish(backend.create_surface(Rect(0, 0, 1, 6)))
        assert printed(mock_print).count('<') == 6
        assert '<0,5>' in printed(mock_print)


class TestBlessedFaults:
    """Tests for host failures surfacing as BackendError."""

    @patch('builtins.print', side_effect=BrokenPipeError("stdout gone"))
    def test_publish_write_failure(self, mock_print):
        """Test that a broken output stream is reported as a backend fault."""
        backend = BlessedBackend(create_mock_terminal())
        surface = backend.create_surface(Rect(0, 0, 1, 2))
        with pytest.raises(BackendError):
            backend.publish(surface)

    @patch('builtins.print')
    def test_failed_cells_redrawn(self, mock_print):
        """Test that cells lost to a failed write are drawn on the next publish."""
        backend = BlessedBackend(create_mock_terminal())
        surface = backend.create_surface(Rect(0, 0, 1, 1))
        backend.write_cell(surface, 0, 0, 'q', 0)
        mock_print.side_effect = OSError("EIO")
        with pytest.raises(BackendError):
            backend.publish(surface)

        mock_print.side_effect = None
        mock_print.reset_mock()
        backend.publish(surface)
        assert printed(mock_print) == '<0,0>[fg0][bg0]q'

    @patch('builtins.print', side_effect=BrokenPipeError("stdout gone"))
    def test_cursor_visibility_failure(self, mock_print):
        """Test that a failed visibility change keeps the old setting."""
        backend = BlessedBackend(create_mock_terminal())
        with pytest.raises(BackendError):
            backend.set_cursor_visibility(0)
        assert backend.cursor_visibility == 1

    @patch('builtins.print')
    def test_close_still_leaves_fullscreen(self, mock_print):
        """Test that fullscreen mode is left even when the final write fails."""
        term = create_mock_terminal()
        backend = BlessedBackend(term)
        backend.open()
        mock_print.side_effect = BrokenPipeError("stdout gone")
        with pytest.raises(BackendError):
            backend.close()
        term.fullscreen.return_value.__exit__.assert_called_once()

    def test_keyboard_failure(self):
        """Test that a failed keyboard read is reported as a backend fault."""
        term = create_mock_terminal()
        term.inkey = Mock(side_effect=OSError("EIO"))
        with pytest.raises(BackendError):
            BlessedInput(term).poll_event(0)

    def test_mode_failure_keeps_mode(self):
        """Test that a terminal refusing a mode change leaves the mode bits alone."""
        term = create_mock_terminal()
        term.raw = Mock(side_effect=OSError("not a tty"))
        source = BlessedInput(term)
        before = source.mode
        with pytest.raises(BackendError):
            source.clear_mode_bits(ENABLE_LINE_INPUT | ENABLE_PROCESSED_INPUT)
        assert source.mode == before


class TestScreenOnBlessed:
    """Tests for a screen drawn through the Blessed backend."""

    @patch('builtins.print')
    def test_output_failures_reported(self, mock_print):
        """Test that screen operations return ERR once the terminal goes away."""
        term = create_mock_terminal()
        screen = Screen(BlessedBackend(term), ScriptedInput())
        assert screen.addch('a') is OK

        mock_print.side_effect = BrokenPipeError("stdout gone")
        assert screen.refresh() is ERR
        assert screen.curs_set(0) is ERR
        assert screen.endwin() is ERR
        assert screen.closed is True
        term.fullscreen.return_value.__exit__.assert_called_once()

    @patch('builtins.print')
    def test_input_failure_gives_no_key(self, mock_print):
        """Test that a failed keyboard read gives the empty keystroke."""
        term = create_mock_terminal()
        term.inkey = Mock(side_effect=OSError("EIO"))
        screen = Screen(BlessedBackend(term), BlessedInput(term))
        key = screen.getch()
        assert key == ''
        assert not key


class TestBlessedInput:
    """Tests for reading keys from the terminal."""

    def test_no_key(self):
        """Test that a timeout gives no event."""
        term = create_mock_terminal()
        assert BlessedInput(term).poll_event(0) is None
        term.inkey.assert_called_once_with(timeout=0)

    def test_character(self):
        """Test that a plain character becomes a literal event."""
        term = create_mock_terminal(keystrokes=[Keystroke('a')])
        event = BlessedInput(term).poll_event()
        assert event.key_down is True
        assert event.char == 'a'
        assert event.vkey is None

    def test_sequence(self):
        """Test that an arrow key becomes a virtual key event."""
        term = create_mock_terminal(keystrokes=[Keystroke('\x1b[D', 260, 'KEY_LEFT')])
        event = BlessedInput(term).poll_event()
        assert event.char is None
        assert event.vkey == keys.VK_LEFT

    def test_function_key(self):
        """Test that function keys map to their virtual keys."""
        term = create_mock_terminal(keystrokes=[Keystroke('\x1bOP', 265, 'KEY_F1')])
        assert BlessedInput(term).poll_event().vkey == keys.VK_F(1)

    def test_cbreak_mode(self):
        """Test that dropping line input enters cbreak mode."""
        term = create_mock_terminal()
        source = BlessedInput(term)
        source.clear_mode_bits(ENABLE_LINE_INPUT)
        term.cbreak.assert_called_once()
        term.raw.assert_not_called()

    def test_raw_mode(self):
        """Test that dropping processed input as well enters raw mode."""
        term = create_mock_terminal()
        source = BlessedInput(term)
        source.clear_mode_bits(ENABLE_LINE_INPUT)
        source.clear_mode_bits(ENABLE_PROCESSED_INPUT)
        term.cbreak.return_value.__exit__.assert_called_once()
        term.raw.assert_called_once()

    def test_unchanged_mode(self):
        """Test that echo-only changes leave the terminal mode alone."""
        term = create_mock_terminal()
        source = BlessedInput(term)
        source.clear_mode_bits(0x4)
        term.cbreak.assert_not_called()
        term.raw.assert_not_called()

    def test_line_mode_restored(self):
        """Test that turning line input back on leaves cbreak mode."""
        term = create_mock_terminal()
        source = BlessedInput(term)
        source.clear_mode_bits(ENABLE_LINE_INPUT)
        source.set_mode_bits(ENABLE_LINE_INPUT)
        term.cbreak.return_value.__exit__.assert_called_once()
        assert source.mode & ENABLE_LINE_INPUT


class TestWrapper:
    """Tests for the wrapper entry point."""

    @patch('builtins.print')
    def test_runs_and_restores(self, mock_print):
        """Test that wrapper passes a screen in and closes it afterwards."""
        term = create_mock_terminal(width=10, height=4)
        screens = []

        def main(screen, greeting):
            screens.append(screen)
            screen.addstr(greeting)
            screen.refresh()
            return screen.LINES, screen.COLS

        assert wrapper(main, "hi", term=term) == (4, 10)
        assert screens[0].closed is True
        term.raw.assert_called_once()
        term.raw.return_value.__exit__.assert_called_once()
        term.fullscreen.return_value.__exit__.assert_called_once()
        assert 'h' in printed(mock_print)

    @patch('builtins.print')
    def test_restores_after_error(self, mock_print):
        """Test that the terminal is restored even when the program fails."""
        term = create_mock_terminal()

        def main(screen):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            wrapper(main, term=term)
        term.fullscreen.return_value.__exit__.assert_called_once()
