import logging
import unittest

from pomodoro import FocusSession, SessionConfig, SettingsStore
from runtime.ticks import TickDependencies, TickProcessor
from runtime.ui import RuntimeUIPublisher


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.states: list[tuple[str, str | None]] = []
        self.trace: list[tuple[str, str]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))
        self.trace.append(("event", event_type))

    def publish_state(self, state: str, *, message=None, **payload):
        self.states.append((state, message))
        self.trace.append(("state", state))


class _DispatcherStub:
    def __init__(self, error: Exception | None = None):
        self.completions = []
        self._error = error

    def dispatch(self, completion):
        self.completions.append(completion)
        if self._error is not None:
            raise self._error
        return []


def _processor(ui, dispatcher) -> TickProcessor:
    return TickProcessor(
        TickDependencies(
            dispatcher=dispatcher,
            logger=logging.getLogger("test"),
            ui=RuntimeUIPublisher(ui),
        )
    )


class TickStateFlowTests(unittest.TestCase):
    def test_countdown_tick_publishes_session_update_only(self) -> None:
        ui = _UIServerStub()
        dispatcher = _DispatcherStub()
        session = FocusSession(SettingsStore(SessionConfig(work=1, short=1, long=1)))
        session.apply("start")

        _processor(ui, dispatcher).handle_tick(session.tick())

        self.assertEqual([("event", "session")], ui.trace)
        payload = ui.events[0][1]
        self.assertEqual("tick", payload["action"])
        self.assertEqual(59, payload["remaining_seconds"])
        self.assertEqual([], dispatcher.completions)

    def test_completion_dispatches_once_then_publishes_in_order(self) -> None:
        ui = _UIServerStub()
        dispatcher = _DispatcherStub()
        processor = _processor(ui, dispatcher)
        session = FocusSession(SettingsStore(SessionConfig(work=1, short=5, long=1)))
        session.apply("start")

        for _ in range(60):
            processor.handle_tick(session.tick())

        self.assertEqual(1, len(dispatcher.completions))
        self.assertEqual("work", dispatcher.completions[0].completed_mode)
        self.assertEqual(
            [("event", "session"), ("event", "reward"), ("state", "idle")],
            ui.trace[-3:],
        )
        self.assertEqual("completed", ui.events[-2][1]["action"])
        reward_payload = ui.events[-1][1]
        self.assertEqual("work", reward_payload["completed_mode"])
        self.assertEqual("short", reward_payload["next_mode"])
        self.assertEqual(1, reward_payload["streak_count"])
        self.assertEqual("Ready for break (05:00)", ui.states[-1][1])

    def test_dispatch_failure_does_not_block_ui_updates(self) -> None:
        ui = _UIServerStub()
        dispatcher = _DispatcherStub(error=RuntimeError("pool closed"))
        processor = _processor(ui, dispatcher)
        session = FocusSession(SettingsStore(SessionConfig(work=1, short=1, long=1)))
        session.apply("start")

        with self.assertLogs("test", level="ERROR"):
            for _ in range(60):
                processor.handle_tick(session.tick())

        self.assertEqual(("state", "idle"), ui.trace[-1])

    def test_missing_ui_server_is_tolerated(self) -> None:
        dispatcher = _DispatcherStub()
        processor = _processor(None, dispatcher)
        session = FocusSession(SettingsStore(SessionConfig(work=1, short=1, long=1)))
        session.apply("start")

        for _ in range(60):
            processor.handle_tick(session.tick())

        self.assertEqual(1, len(dispatcher.completions))


if __name__ == "__main__":
    unittest.main()
