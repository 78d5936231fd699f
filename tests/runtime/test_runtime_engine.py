import logging
import unittest

from pomodoro import FocusSession, SessionConfig, SettingsStore
from runtime import RuntimeBootstrap, RuntimeEngine


class _FakeMonotonic:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.states: list[str] = []
        self.stopped = False

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def publish_state(self, state: str, *, message=None, **payload):
        self.states.append(state)

    def stop(self, timeout_seconds: float = 5.0) -> None:
        self.stopped = True


class _DispatcherStub:
    def __init__(self):
        self.completions = []
        self.shutdown_calls = 0

    def dispatch(self, completion):
        self.completions.append(completion)
        return []

    def shutdown(self, *, wait: bool = False) -> None:
        self.shutdown_calls += 1


class RuntimeEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeMonotonic()
        self.session = FocusSession(
            SettingsStore(SessionConfig(work=1, short=1, long=1)),
            monotonic_fn=self.clock,
        )
        self.ui = _UIServerStub()
        self.dispatcher = _DispatcherStub()
        self.engine = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test"),
                session=self.session,
                dispatcher=self.dispatcher,
                ui_server=self.ui,
            )
        )

    def _session_actions(self) -> list[object]:
        return [payload["action"] for event, payload in self.ui.events if event == "session"]

    def test_due_tick_is_delivered_after_commands(self) -> None:
        self.engine.submit_command({"command": "start"})
        self.engine.run_once()
        self.assertEqual(["start"], self._session_actions())

        self.clock.now += 1.0
        self.engine.run_once()

        self.assertEqual(["start", "tick"], self._session_actions())
        self.assertEqual(59, self.session.snapshot().remaining_seconds)

    def test_pending_pause_preempts_due_tick(self) -> None:
        self.engine.submit_command({"command": "start"})
        self.engine.run_once()

        self.clock.now += 1.0
        self.engine.submit_command({"command": "pause"})
        self.engine.run_once()

        self.assertEqual(["start", "pause"], self._session_actions())
        self.assertEqual(60, self.session.snapshot().remaining_seconds)
        self.assertFalse(self.session.snapshot().is_running)

    def test_completion_reaches_dispatcher_once(self) -> None:
        self.engine.submit_command({"command": "start"})
        self.engine.run_once()
        for _ in range(60):
            self.clock.now += 1.0
            self.engine.run_once()
        for _ in range(5):
            self.clock.now += 1.0
            self.engine.run_once()

        self.assertEqual(1, len(self.dispatcher.completions))
        self.assertEqual("short", self.session.snapshot().mode)
        self.assertFalse(self.session.snapshot().is_running)

    def test_run_publishes_startup_sync_and_shuts_down(self) -> None:
        self.engine.stop()

        self.assertEqual(0, self.engine.run())

        self.assertEqual(["sync"], self._session_actions())
        self.assertEqual(["idle"], self.ui.states)
        self.assertTrue(self.ui.stopped)
        self.assertEqual(1, self.dispatcher.shutdown_calls)


if __name__ == "__main__":
    unittest.main()
