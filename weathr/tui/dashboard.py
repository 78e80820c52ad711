"""
weathr Dashboard - Animated ASCII weather in the terminal.

Draws a house under the current sky: rain, thunderstorms, clouds, birds
or sun depending on the weather at the configured location.

Usage:
    weathr
    weathr --simulate rain
    weathr --simulate hail

Keyboard Shortcuts:
    [q] Quit
    [Ctrl-C] Quit

Each tick runs strictly in order: refresh weather if due, re-read the
terminal size, erase, update + render the active layers, draw the header,
flush once, then wait briefly for a key.
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, List, Optional

from .. import __version__
from ..client import OpenMeteoProvider, WeatherClient
from ..config import Config, usage_hint
from ..constants import Layout, Timeouts
from ..models import parse_weather_condition
from ..utils.error_handling import (
    ConfigError,
    ErrorCategory,
    WeathrError,
    WeatherError,
    handle_error,
)
from .colors import Colors
from .renderer import TerminalRenderer
from .scene import WeatherScene
from .session import WeatherSession

logger = logging.getLogger(__name__)

# Ctrl-C arrives as a plain key code in raw mode
KEY_CTRL_C = 3
QUIT_KEYS = frozenset({ord('q'), ord('Q'), KEY_CTRL_C})

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Dashboard:
    """Main loop tying the weather session, the scene and the terminal together."""

    def __init__(self, session: WeatherSession,
                 client: Optional[WeatherClient] = None,
                 renderer: Optional[TerminalRenderer] = None,
                 clock: Callable[[], float] = time.monotonic,
                 refresh_interval: float = Timeouts.WEATHER_REFRESH,
                 frame_delay: float = Timeouts.SUN_FRAME_DELAY,
                 poll_timeout_ms: int = Timeouts.INPUT_POLL_MS):
        if client is None and not session.is_simulated:
            raise ValueError("a weather client is required unless the condition is simulated")
        self.session = session
        self.client = client
        self.renderer = renderer
        self.scene: Optional[WeatherScene] = None
        self.running = False
        self.refresh_interval = refresh_interval
        self.frame_delay = frame_delay
        self.poll_timeout_ms = poll_timeout_ms
        self._clock = clock
        self.last_layers: List[str] = []

    def run(self):
        """Take over the terminal until the user quits."""
        if self.renderer is None:
            self.renderer = TerminalRenderer()
        with mute_console_logging(), self.renderer:
            self._main_loop()

    def _main_loop(self):
        self.running = True
        self.session.last_frame_time = self._clock()
        if self.session.is_simulated:
            logger.info(f"Scene started, simulating {self.session.simulated_condition.display_name}")
        else:
            logger.info("Scene started")
        try:
            while self.running:
                self.tick()
        except KeyboardInterrupt:
            self._quit()
        logger.info("Scene stopped")

    def tick(self):
        """Run one frame."""
        self._refresh_weather()

        self.renderer.update_size()
        width, height = self.renderer.get_size()
        if self.scene is None:
            self.scene = WeatherScene(width, height)

        self.renderer.clear()
        flags = self.session.flags
        self.last_layers = self.scene.draw(self.renderer, flags)
        self._draw_header(width, height)
        self.renderer.flush()

        key = self.renderer.poll_key(self.poll_timeout_ms)
        if key is not None:
            self._handle_input(key)

        # The sun only moves on dry frames, on its own slower timer
        if not flags.has_precipitation:
            now = self._clock()
            if now - self.session.last_frame_time >= self.frame_delay:
                self.scene.sun.next_frame()
                self.session.last_frame_time = now

    def _refresh_weather(self):
        if not self.session.needs_refresh(self._clock(), self.refresh_interval):
            return
        try:
            snapshot = self.client.get_current_weather(self.session.location, self.session.units)
        except WeatherError as e:
            handle_error(e, "refresh_weather", ErrorCategory.NETWORK)
            self.session.apply_error(f"Error fetching weather: {e}", self._clock())
        else:
            self.session.apply_snapshot(snapshot, self._clock())

    def _draw_header(self, width: int, height: int):
        row, col = Layout.HEADER_ROW, Layout.HEADER_COL
        if row >= height or col >= width:
            return
        text = self.session.status_line()[:width - col]
        color = Colors.ERROR if self.session.error else Colors.HEADER
        self.renderer.write_line(col, row, text, color)

    def _handle_input(self, key: int):
        """Quit keys end the loop; everything else is ignored."""
        if key in QUIT_KEYS:
            self._quit()

    def _quit(self):
        self.running = False
        self.session.terminate()


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Handler:
    """
    Log everything to a file and warnings to stderr.

    Returns the stderr handler.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root.addHandler(console)

    log_dir = log_dir or Path.home() / '.weathr' / 'logs'
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'weathr.log', encoding='utf-8')
    except OSError as e:
        logger.debug(f"File logging disabled: {e}")
    else:
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    return console


@contextmanager
def mute_console_logging():
    """Silence terminal-bound log handlers while curses owns the screen."""
    muted = []
    for handler in logging.getLogger().handlers:
        # FileHandler is a StreamHandler too, but never touches the terminal
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            muted.append((handler, handler.level))
            handler.setLevel(logging.CRITICAL + 1)
    try:
        yield
    finally:
        for handler, level in muted:
            handler.setLevel(level)


def run_dashboard(simulate: Optional[str] = None, config_path: Optional[Path] = None):
    """
    Run the dashboard.

    Args:
        simulate: Condition name to show instead of live weather
        config_path: Explicit config file (defaults to the XDG search paths)
    """
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        handle_error(e, "load_config", ErrorCategory.CONFIG)
        print(f"Error loading config: {e}", file=sys.stderr)
        print("", file=sys.stderr)
        print(usage_hint(), file=sys.stderr)
        config = Config.default()

    location = config.location.to_location()

    if simulate is not None:
        condition = parse_weather_condition(simulate)
        session = WeatherSession.simulated(location, condition)
        client = None
    else:
        session = WeatherSession(location=location)
        client = WeatherClient(OpenMeteoProvider())

    dashboard = Dashboard(session, client=client)
    dashboard.run()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the weathr command."""
    parser = argparse.ArgumentParser(
        prog="weathr",
        description="Terminal-based ASCII weather",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    weathr                      # Live weather for the configured location
    weathr --simulate rain      # Show rain regardless of the real weather
    weathr --simulate hail      # Thunderstorm with hail

Keyboard Shortcuts:
    q       Quit
    Ctrl-C  Quit
        """
    )
    parser.add_argument("--simulate", "-s", metavar="CONDITION",
                        help="Simulate weather condition (clear, rain, drizzle, snow, etc.)")
    parser.add_argument("--config", "-c", type=Path,
                        help="Path to config.toml")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging to the log file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        run_dashboard(simulate=args.simulate, config_path=args.config)
    except WeathrError as e:
        handle_error(e, "run_dashboard")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        handle_error(e, "run_dashboard", ErrorCategory.TERMINAL)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
