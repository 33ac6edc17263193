import unittest
from types import SimpleNamespace
from unittest.mock import patch

import requests

from figma_changelog.notify.slack_client import SlackClient, SlackError

WEBHOOK = "https://hooks.slack.com/services/T/B/X"


class TestSlackClient(unittest.TestCase):
    def test_post_success(self) -> None:
        calls = []

        def fake_post(url, *_args, **kwargs):
            calls.append((url, kwargs))
            return SimpleNamespace(status_code=200, text="ok")

        payload = {"blocks": [{"type": "divider"}]}
        with patch("requests.post", fake_post):
            SlackClient(WEBHOOK, request_timeout=3).post(payload)

        url, kwargs = calls[0]
        self.assertEqual(url, WEBHOOK)
        self.assertEqual(kwargs["json"], payload)
        self.assertEqual(kwargs["timeout"], 3)

    def test_error_status(self) -> None:
        def fake_post(url, *_args, **kwargs):
            return SimpleNamespace(status_code=400, text="invalid_blocks")

        with patch("requests.post", fake_post):
            with self.assertRaises(SlackError) as ctx:
                SlackClient(WEBHOOK).post({"blocks": []})
        self.assertIn("400 invalid_blocks", str(ctx.exception))

    def test_network_error(self) -> None:
        def fake_post(url, *_args, **kwargs):
            raise requests.ConnectionError("down")

        with patch("requests.post", fake_post):
            with self.assertRaises(SlackError):
                SlackClient(WEBHOOK).post({"blocks": []})


if __name__ == "__main__":
    unittest.main()
