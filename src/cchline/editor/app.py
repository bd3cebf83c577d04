"""Interactive editor event loop.

Owns the only mutable reference to the editor state. Keys arrive from a
reader thread; the install probe runs on a worker thread. Both post events to
one queue, and each event is fully reduced before the next frame is drawn.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live

from ..config import load_config, save_config
from ..installer import InstallError, install_status_line, uninstall_status_line
from ..preview import generate_preview
from ..types import ConfirmAction
from ..version import check_install_status
from .layout import remember_viewport, render_frame
from .reducer import (
    ActionFinished,
    CheckInstallStatus,
    Command,
    Event,
    InstallStatusChecked,
    KeyPressed,
    Resized,
    RunAction,
    init,
    update,
)
from .state import EditorState
from .theme import EditorTheme, resolve_theme

logger = logging.getLogger(__name__)

# How often the loop wakes up to look for terminal resizes.
POLL_INTERVAL = 0.1


class KeyReader:
    """Reads one key at a time on a daemon thread.

    After posting a key the reader waits for :meth:`ack` before reading the
    next one, so once the loop decides to quit no read is left pending.
    """

    def __init__(self, events: "queue.Queue[Event]"):
        self._events = events
        self._ack = threading.Event()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="cchline-keys", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def ack(self) -> None:
        self._ack.set()

    def stop(self) -> None:
        self._stop.set()
        self._ack.set()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                key = readchar.readkey()
            except KeyboardInterrupt:
                key = readchar.key.CTRL_C
            except EOFError:
                logger.debug("Key input closed")
                key = readchar.key.CTRL_C
            self._events.put(KeyPressed(key))
            self._ack.wait()
            self._ack.clear()


def run_action(action: ConfirmAction) -> ActionFinished:
    """Run an install/uninstall and describe the outcome."""
    if action == ConfirmAction.INSTALL:
        try:
            path = install_status_line()
        except InstallError as e:
            logger.warning("Install failed: %s", e)
            return ActionFinished(action, False, f"Install failed: {e}")
        return ActionFinished(action, True, f"Installed status line in {path}")

    try:
        removed = uninstall_status_line()
    except InstallError as e:
        logger.warning("Uninstall failed: %s", e)
        return ActionFinished(action, False, f"Uninstall failed: {e}")
    if removed:
        return ActionFinished(action, True, "Removed status line from Claude Code settings")
    return ActionFinished(action, True, "Status line was not installed")


class EditorApp:
    """Wires the reducer to the terminal."""

    def __init__(
        self,
        state: EditorState,
        theme: EditorTheme,
        console: Console | None = None,
    ):
        self.state = state
        self.theme = theme
        self.console = console or Console(highlight=False)
        self.events: "queue.Queue[Event]" = queue.Queue()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cchline-probe")

    def _post_probe_result(self, future: "Future") -> None:
        self.events.put(InstallStatusChecked(future.result()))

    def run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, CheckInstallStatus):
                future = self._executor.submit(check_install_status)
                future.add_done_callback(self._post_probe_result)
            elif isinstance(command, RunAction):
                self.events.put(run_action(command.action))

    def dispatch(self, event: Event) -> None:
        self.state, commands = update(self.state, event)
        self.run_commands(commands)

    def _check_resize(self) -> bool:
        width, height = self.console.size
        if (width, height) == (self.state.width, self.state.height):
            return False
        logger.debug("Terminal resized to %dx%d", width, height)
        self.dispatch(Resized(width, height))
        return True

    def _draw(self, live: Live) -> None:
        frame = render_frame(self.state, generate_preview(self.state.config), self.theme)
        self.state = remember_viewport(self.state, frame)
        live.update(frame.to_text(), refresh=True)

    def run(self) -> EditorState:
        """Run until the user quits and return the final state."""
        reader = KeyReader(self.events)
        self.state, commands = init(self.state)
        self.run_commands(commands)
        self._check_resize()

        try:
            with Live(console=self.console, screen=True, auto_refresh=False) as live:
                self._draw(live)
                reader.start()
                while not self.state.quitting:
                    try:
                        event = self.events.get(timeout=POLL_INTERVAL)
                    except queue.Empty:
                        event = None

                    if event is not None:
                        self.dispatch(event)
                        if isinstance(event, KeyPressed):
                            if self.state.quitting:
                                reader.stop()
                            else:
                                reader.ack()
                    resized = self._check_resize()
                    if event is not None or resized:
                        self._draw(live)
        finally:
            reader.stop()
            self._executor.shutdown(wait=False)
        return self.state


def run_editor(config_path: Path | None = None, debug: bool = False, theme_name: str | None = None) -> int:
    """Open the editor, then save the arrangement on quit.

    A failed save is reported after the screen is restored and does not
    change the exit code.
    """
    console = Console(highlight=False)
    cfg = load_config(config_path)
    width, height = console.size
    state = EditorState.from_config(cfg, debug=debug, width=width, height=height)

    app = EditorApp(state, resolve_theme(theme_name), console=console)
    final = app.run()

    try:
        path = save_config(final.config, config_path)
    except OSError as e:
        logger.warning("Failed to save config: %s", e)
        console.print(f"Failed to save configuration: {e}", style="red", markup=False)
    else:
        logger.debug("Saved config to %s", path)
    return 0
