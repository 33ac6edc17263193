import json
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import requests

from figma_changelog.figma.client import FigmaClient, FigmaError


class DummyResponse(SimpleNamespace):
    def json(self):
        return json.loads(self.text)


class TestFigmaClient(unittest.TestCase):
    def test_get_component_success(self) -> None:
        calls = []

        def fake_get(url, *_args, **kwargs):
            calls.append((url, kwargs))
            return DummyResponse(status_code=200, text=json.dumps({"meta": {"node_id": "1:2"}}))

        with patch("requests.get", fake_get):
            client = FigmaClient("token", request_timeout=5)
            data = client.get_component("abc")

        self.assertEqual(data, {"meta": {"node_id": "1:2"}})
        url, kwargs = calls[0]
        self.assertEqual(url, "https://api.figma.com/v1/components/abc")
        self.assertEqual(kwargs["headers"], {"X-Figma-Token": "token"})
        self.assertEqual(kwargs["timeout"], 5)

    def test_get_style_path(self) -> None:
        urls = []

        def fake_get(url, *_args, **kwargs):
            urls.append(url)
            return DummyResponse(status_code=200, text="{}")

        with patch("requests.get", fake_get):
            FigmaClient("token").get_style("S1")

        self.assertEqual(urls, ["https://api.figma.com/v1/styles/S1"])

    def test_error_status(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=404, text="Not found")

        with patch("requests.get", fake_get):
            with self.assertRaises(FigmaError) as ctx:
                FigmaClient("token").get_component("missing")
        self.assertIn("404", str(ctx.exception))

    def test_network_error(self) -> None:
        def fake_get(url, *_args, **kwargs):
            raise requests.ConnectionError("refused")

        with patch("requests.get", fake_get):
            with self.assertRaises(FigmaError):
                FigmaClient("token").get_component("abc")

    def test_invalid_json(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text="not json")

        with patch("requests.get", fake_get):
            with self.assertRaises(FigmaError):
                FigmaClient("token").get_component("abc")

    def test_non_object_body(self) -> None:
        def fake_get(url, *_args, **kwargs):
            return DummyResponse(status_code=200, text="[]")

        with patch("requests.get", fake_get):
            with self.assertRaises(FigmaError):
                FigmaClient("token").get_style("abc")


if __name__ == "__main__":
    unittest.main()
