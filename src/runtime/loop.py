"""Runtime orchestration loop for UI commands and one-second session ticks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Any, Optional

from contracts.ui_protocol import EVENT_ERROR, STATE_ERROR
from pomodoro import FocusSession
from pomodoro.constants import ACTION_SYNC, REASON_STARTUP
from rewards import RewardDispatcher
from server import UIServer

from .commands import RuntimeCommandHandler
from .messages import session_status_message, session_ui_state
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher

IDLE_POLL_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    session: FocusSession
    dispatcher: Optional[RewardDispatcher]
    ui_server: Optional[UIServer]


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    command_queue: Queue[dict[str, Any]] = field(default_factory=Queue)
    stop_requested: threading.Event = field(default_factory=threading.Event)


class RuntimeEngine:
    """Single-threaded loop: commands are applied first, then the due tick is delivered.

    The session is the only mutable timer state and is touched from this thread
    alone. The UI server thread only enqueues commands.
    """
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._session = bootstrap.session

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._commands = RuntimeCommandHandler(
            session=self._session,
            ui=self._ui,
            logger=self._logger,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                dispatcher=bootstrap.dispatcher,
                logger=self._logger,
                ui=self._ui,
            )
        )
        self._resources = RuntimeResources()

    def submit_command(self, command: dict[str, Any]) -> None:
        """Thread-safe entry point used by the UI server."""
        self._resources.command_queue.put(command)

    def stop(self) -> None:
        self._resources.stop_requested.set()

    def run(self) -> int:
        self._publish_startup_sync()
        self._logger.info("Ready! %s", session_status_message(self._session.snapshot()))

        try:
            while not self._resources.stop_requested.is_set():
                command = self._poll_command()
                if command is not None:
                    self._handle_command(command)
                    continue
                self._emit_session_tick()
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def run_once(self) -> None:
        """Drain pending commands, then deliver the tick if one is due."""
        while True:
            try:
                command = self._resources.command_queue.get_nowait()
            except Empty:
                break
            self._handle_command(command)
        self._emit_session_tick()

    def _poll_command(self) -> Optional[dict[str, Any]]:
        wait_seconds = self._session.seconds_until_tick()
        if wait_seconds is None or wait_seconds > IDLE_POLL_SECONDS:
            wait_seconds = IDLE_POLL_SECONDS
        try:
            return self._resources.command_queue.get(timeout=wait_seconds)
        except Empty:
            return None

    def _handle_command(self, command: dict[str, Any]) -> None:
        try:
            self._commands.handle_command(command)
        except Exception as error:
            self._logger.error("UI command failed: %s", error, exc_info=True)
            self._ui.publish(
                EVENT_ERROR,
                state=STATE_ERROR,
                message=f"UI command failed: {error}",
            )

    def _emit_session_tick(self) -> None:
        tick = self._session.poll()
        if tick is not None:
            self._tick_processor.handle_tick(tick)

    def _publish_startup_sync(self) -> None:
        snapshot = self._session.snapshot()
        self._ui.publish_session_update(
            snapshot,
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._ui.publish_state(
            session_ui_state(snapshot),
            message=session_status_message(snapshot),
        )

    def _shutdown(self) -> None:
        dispatcher = self._bootstrap.dispatcher
        if dispatcher is not None:
            self._logger.info("Stopping reward dispatcher...")
            dispatcher.shutdown(wait=False)

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
