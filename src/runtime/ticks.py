"""Tick handlers that publish countdown updates and hand completions to the dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from pomodoro import SessionCompletion, SessionTick
from pomodoro.constants import (
    ACTION_COMPLETED,
    ACTION_TICK,
    REASON_COMPLETED,
    REASON_TICK,
)

from .messages import session_status_message, session_ui_state
from .ui import RuntimeUIPublisher


class CompletionDispatcherLike(Protocol):
    def dispatch(self, completion: SessionCompletion) -> object:
        ...


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing session tick events."""
    dispatcher: Optional[CompletionDispatcherLike]
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Publishes countdown ticks and fires completion side effects once per interval."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, tick: SessionTick) -> None:
        deps = self._dependencies
        if tick.completion is None:
            deps.ui.publish_session_update(
                tick.snapshot,
                action=ACTION_TICK,
                accepted=True,
                reason=REASON_TICK,
            )
            return

        completion = tick.completion
        if deps.dispatcher is not None:
            try:
                deps.dispatcher.dispatch(completion)
            except Exception as error:
                deps.logger.error("Completion dispatch failed: %s", error, exc_info=True)

        message = session_status_message(tick.snapshot)
        deps.ui.publish_session_update(
            tick.snapshot,
            action=ACTION_COMPLETED,
            accepted=True,
            reason=REASON_COMPLETED,
            message=message,
        )
        deps.ui.publish_completion(completion)
        deps.ui.publish_state(session_ui_state(tick.snapshot), message=message)
