"""
Tests for the curses renderer.

curses itself is replaced with a mock so these run without a terminal.
"""

from unittest.mock import MagicMock, patch

import pytest

from weathr.tui.colors import Colors
from weathr.tui.renderer import TerminalRenderer
from weathr.utils.error_handling import RenderError

A_BOLD = 1 << 21


class FakeCursesError(Exception):
    pass


@pytest.fixture
def fake_curses():
    mock = MagicMock()
    mock.error = FakeCursesError
    mock.A_NORMAL = 0
    mock.A_BOLD = A_BOLD
    mock.color_pair.side_effect = lambda pair: pair << 8
    with patch("weathr.tui.renderer.curses", mock), \
            patch("weathr.tui.renderer.CURSES_AVAILABLE", True), \
            patch.object(Colors, "init_colors", return_value=True):
        yield mock


@pytest.fixture
def screen():
    window = MagicMock()
    window.getmaxyx.return_value = (24, 80)
    return window


class TestLifecycle:
    """Tests for terminal setup and restore."""

    def test_init_enters_raw_mode(self, fake_curses, screen):
        renderer = TerminalRenderer(screen)
        renderer.init()

        fake_curses.noecho.assert_called_once()
        fake_curses.raw.assert_called_once()
        screen.keypad.assert_called_with(True)
        fake_curses.curs_set.assert_called_with(0)
        assert renderer.is_active
        assert renderer.get_size() == (80, 24)

    def test_init_creates_screen(self, fake_curses, screen):
        fake_curses.initscr.return_value = screen
        renderer = TerminalRenderer()
        renderer.init()
        assert renderer.screen is screen

    def test_hidden_cursor_is_optional(self, fake_curses, screen):
        fake_curses.curs_set.side_effect = FakeCursesError("unsupported")
        renderer = TerminalRenderer(screen)
        renderer.init()
        assert renderer.is_active

    def test_init_failure_restores_terminal(self, fake_curses, screen):
        fake_curses.raw.side_effect = FakeCursesError("no tty")
        renderer = TerminalRenderer(screen)

        with pytest.raises(RenderError, match="cannot initialize terminal"):
            renderer.init()

        fake_curses.endwin.assert_called_once()
        assert not renderer.is_active

    def test_curses_unavailable(self):
        with patch("weathr.tui.renderer.CURSES_AVAILABLE", False):
            with pytest.raises(RenderError, match="curses"):
                TerminalRenderer().init()

    def test_cleanup_is_idempotent(self, fake_curses, screen):
        renderer = TerminalRenderer(screen)
        renderer.init()
        renderer.cleanup()
        renderer.cleanup()

        fake_curses.endwin.assert_called_once()
        fake_curses.noraw.assert_called_once()
        fake_curses.echo.assert_called_once()

    def test_cleanup_continues_after_failed_step(self, fake_curses, screen):
        fake_curses.noraw.side_effect = FakeCursesError("gone")
        renderer = TerminalRenderer(screen)
        renderer.init()
        renderer.cleanup()

        fake_curses.echo.assert_called_once()
        fake_curses.endwin.assert_called_once()

    def test_context_manager_restores_on_exception(self, fake_curses, screen):
        with pytest.raises(ValueError):
            with TerminalRenderer(screen):
                raise ValueError("boom")
        fake_curses.endwin.assert_called_once()


class TestDrawing:
    """Tests for queued writes."""

    @pytest.fixture
    def renderer(self, fake_curses, screen):
        renderer = TerminalRenderer(screen)
        renderer.init()
        return renderer

    def test_write_glyph_with_color(self, renderer, screen):
        renderer.write_glyph(5, 7, '|', Colors.RAIN)
        screen.addstr.assert_called_with(7, 5, '|', Colors.RAIN << 8)

    def test_write_bold(self, renderer, screen):
        renderer.write_glyph(1, 1, '/', Colors.LIGHTNING, bold=True)
        screen.addstr.assert_called_with(1, 1, '/', (Colors.LIGHTNING << 8) | A_BOLD)

    def test_write_without_colors(self, fake_curses, screen):
        with patch.object(Colors, "init_colors", return_value=False):
            renderer = TerminalRenderer(screen)
            renderer.init()
        renderer.write_line(2, 1, "hello", Colors.HEADER)
        screen.addstr.assert_called_with(1, 2, "hello", 0)

    def test_bottom_right_cell_is_tolerated(self, renderer, screen):
        screen.addstr.side_effect = FakeCursesError("addwstr() returned ERR")
        renderer.write_glyph(79, 23, '.', Colors.RAIN)

    def test_other_write_errors_raise(self, renderer, screen):
        screen.addstr.side_effect = FakeCursesError("addwstr() returned ERR")
        with pytest.raises(RenderError):
            renderer.write_glyph(10, 5, '.', Colors.RAIN)

    def test_write_centered(self, renderer, screen):
        renderer.write_centered(["abcd", "ab"], 3, Colors.SUN)
        rows = [c.args[:3] for c in screen.addstr.call_args_list]
        assert rows == [(3, 38, "abcd"), (4, 38, "ab")]

    def test_write_centered_skips_rows_below_screen(self, renderer, screen):
        renderer.write_centered(["x"] * 5, 22)
        assert [c.args[0] for c in screen.addstr.call_args_list] == [22, 23]

    def test_write_centered_cuts_wide_lines(self, renderer, screen):
        screen.getmaxyx.return_value = (24, 10)
        renderer.update_size()
        renderer.write_centered(["0123456789ABCDEF"], 0)
        screen.addstr.assert_called_once_with(0, 0, "0123456789", 0)

    def test_clear_uses_erase(self, renderer, screen):
        renderer.clear()
        screen.erase.assert_called_once()
        screen.clear.assert_not_called()

    def test_flush_is_single_update(self, renderer, screen, fake_curses):
        renderer.flush()
        screen.noutrefresh.assert_called_once()
        fake_curses.doupdate.assert_called_once()
        screen.refresh.assert_not_called()

    def test_resize_is_picked_up(self, renderer, screen):
        screen.getmaxyx.return_value = (40, 120)
        renderer.update_size()
        assert renderer.get_size() == (120, 40)


class TestInput:
    """Tests for key polling."""

    def test_poll_timeout(self, fake_curses, screen):
        screen.getch.return_value = -1
        renderer = TerminalRenderer(screen)
        renderer.init()

        assert renderer.poll_key(33) is None
        screen.timeout.assert_called_with(33)

    def test_poll_key(self, fake_curses, screen):
        screen.getch.return_value = ord('q')
        renderer = TerminalRenderer(screen)
        renderer.init()
        assert renderer.poll_key(33) == ord('q')
