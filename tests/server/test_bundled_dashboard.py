import asyncio
import logging
import unittest

from websockets.datastructures import Headers
from websockets.http11 import Request

from app_config_schema import UIServerSettings
from server import UIServer, UIServerConfig
from server.events import parse_command


class BundledDashboardTests(unittest.TestCase):
    def setUp(self) -> None:
        config = UIServerConfig.from_settings(UIServerSettings(index_file=""))
        self.server = UIServer(config, logging.getLogger("test"))
        response = asyncio.run(self.server._process_request(None, Request("/", Headers())))
        self.html = response.body.decode("utf-8")

    def test_dashboard_has_duration_inputs_for_every_mode(self) -> None:
        for mode in ("work", "short", "long"):
            with self.subTest(mode=mode):
                self.assertIn(f'data-duration="{mode}"', self.html)
        self.assertIn('command: "update_settings"', self.html)

    def test_dashboard_duration_payload_is_a_known_command(self) -> None:
        self.assertEqual(
            {"command": "update_settings", "long": 20},
            parse_command('{"command": "update_settings", "long": 20}'),
        )


if __name__ == "__main__":
    unittest.main()
