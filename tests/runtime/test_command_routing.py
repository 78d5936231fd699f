import logging
import unittest

from pomodoro import FocusSession, SessionConfig, SettingsStore
from runtime.commands import RuntimeCommandHandler
from runtime.ui import RuntimeUIPublisher


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.states: list[tuple[str, str | None]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def publish_state(self, state: str, *, message=None, **payload):
        self.states.append((state, message))


class RuntimeCommandHandlerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ui = _UIServerStub()
        self.session = FocusSession(SettingsStore(SessionConfig(work=25, short=5, long=15)))
        self.handler = RuntimeCommandHandler(
            session=self.session,
            ui=RuntimeUIPublisher(self.ui),
            logger=logging.getLogger("test"),
        )

    def test_start_publishes_update_and_focusing_state(self) -> None:
        result = self.handler.handle_command({"command": "start"})

        self.assertTrue(result.accepted)
        event_type, payload = self.ui.events[-1]
        self.assertEqual("session", event_type)
        self.assertEqual("start", payload["action"])
        self.assertTrue(payload["is_running"])
        self.assertEqual(
            ("focusing", "Focus on 'General Focus' (25:00 remaining)"),
            self.ui.states[-1],
        )

    def test_rejected_command_publishes_reason_without_state(self) -> None:
        result = self.handler.handle_command({"command": "pause"})

        self.assertFalse(result.accepted)
        payload = self.ui.events[-1][1]
        self.assertFalse(payload["accepted"])
        self.assertEqual("not_running", payload["reason"])
        self.assertEqual("The timer is not running.", payload["message"])
        self.assertEqual([], self.ui.states)

    def test_update_settings_accepts_numeric_strings(self) -> None:
        result = self.handler.handle_command(
            {"command": "update_settings", "work": "50", "short": 10.0}
        )

        self.assertTrue(result.accepted)
        self.assertEqual(
            SessionConfig(work=50, short=10, long=15),
            self.session.settings.config,
        )

    def test_update_settings_rejects_non_integer_values(self) -> None:
        for bad in ("abc", "²", "1.5", "", 2.5, True, None):
            with self.subTest(value=bad):
                result = self.handler.handle_command({"command": "update_settings", "work": bad})
                self.assertFalse(result.accepted)
                self.assertEqual("invalid_duration", result.reason)
        self.assertEqual(25, self.session.settings.config.work)

    def test_non_ascii_digit_duration_publishes_rejection(self) -> None:
        result = self.handler.handle_command({"command": "update_settings", "short": "²"})

        self.assertFalse(result.accepted)
        event_type, payload = self.ui.events[-1]
        self.assertEqual("session", event_type)
        self.assertEqual("update_settings", payload["action"])
        self.assertEqual("invalid_duration", payload["reason"])
        self.assertEqual(5, self.session.settings.config.short)

    def test_set_mode_task_and_sound_pass_arguments(self) -> None:
        mode = self.handler.handle_command({"command": "set_mode", "mode": "long"})
        task = self.handler.handle_command({"command": "set_task", "task_label": "Essay draft"})
        sound = self.handler.handle_command({"command": "set_alert_sound", "alert_sound": "digital_alert"})

        self.assertEqual(900, mode.snapshot.remaining_seconds)
        self.assertEqual("Essay draft", task.snapshot.task_label)
        self.assertEqual("digital_alert", sound.snapshot.alert_sound)

    def test_set_mode_without_mode_is_rejected(self) -> None:
        result = self.handler.handle_command({"command": "set_mode"})
        self.assertFalse(result.accepted)
        self.assertEqual("invalid_mode", result.reason)

    def test_unknown_command_is_ignored(self) -> None:
        with self.assertLogs("test", level="WARNING"):
            self.assertIsNone(self.handler.handle_command({"command": "self_destruct"}))
        self.assertEqual([], self.ui.events)


if __name__ == "__main__":
    unittest.main()
