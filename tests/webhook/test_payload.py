import json
import unittest
from datetime import datetime, timezone

from figma_changelog.webhook.payload import (
    Asset,
    PayloadError,
    normalize_payload,
    parse_timestamp,
)

PASSCODE = "ids-changelog-2026"


def test_ping_event_is_skipped():
    assert normalize_payload(json.dumps({"event_type": "PING"}), PASSCODE) is None


def test_wrong_passcode_is_skipped(webhook_event):
    webhook_event["passcode"] = "guess"
    assert normalize_payload(webhook_event, PASSCODE) is None


def test_missing_passcode_is_skipped(webhook_event):
    del webhook_event["passcode"]
    assert normalize_payload(webhook_event, PASSCODE) is None


def test_changes_are_flattened(webhook_event):
    webhook_event["changes"]["created_styles"] = [{"name": "Primary", "key": "S1"}]
    webhook_event["changes"]["deleted_components"] = [
        {"name": "Size=Small", "key": "C1"},
        {"name": "Size=Large", "key": "C2"},
    ]

    change_set = normalize_payload(json.dumps(webhook_event), PASSCODE)

    assert change_set.file_key == "FILE123"
    assert change_set.triggered_by == "Mina"
    assert change_set.created_styles == (Asset(name="Primary", key="S1"),)
    assert [a.key for a in change_set.deleted_components] == ["C1", "C2"]
    assert change_set.created_variables == ()


def test_changes_override_top_level_fields(webhook_event):
    webhook_event["created_variables"] = [{"name": "stale", "key": "V0"}]
    webhook_event["changes"]["created_variables"] = [{"name": "fresh", "key": "V1"}]

    change_set = normalize_payload(webhook_event, PASSCODE)

    assert change_set.created_variables == (Asset(name="fresh", key="V1"),)


def test_unknown_fields_are_preserved(webhook_event):
    webhook_event["changes"]["created_thumbnails"] = ["x"]

    change_set = normalize_payload(webhook_event, PASSCODE)

    assert change_set.extras["file_name"] == "Design System"
    assert change_set.extras["created_thumbnails"] == ["x"]
    assert change_set.extras["event_type"] == "LIBRARY_PUBLISH"


def test_missing_changes_object_yields_empty_change_set(webhook_event):
    del webhook_event["changes"]

    change_set = normalize_payload(webhook_event, PASSCODE)

    assert change_set.created_components == ()
    assert change_set.modified_variables == ()


def test_input_mapping_is_not_mutated(webhook_event):
    normalize_payload(webhook_event, PASSCODE)
    assert "changes" in webhook_event


def test_missing_handle_is_none(webhook_event):
    del webhook_event["triggered_by"]
    assert normalize_payload(webhook_event, PASSCODE).triggered_by is None


def test_timestamp_is_parsed(webhook_event):
    change_set = normalize_payload(webhook_event, PASSCODE)
    assert change_set.timestamp == datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)


class TestMalformedPayloads(unittest.TestCase):
    def _event(self, **overrides):
        event = {"event_type": "LIBRARY_PUBLISH", "passcode": PASSCODE, "file_key": "F"}
        event.update(overrides)
        return event

    def test_invalid_json(self):
        with self.assertRaises(PayloadError):
            normalize_payload("{not json", PASSCODE)

    def test_non_object_json(self):
        with self.assertRaises(PayloadError):
            normalize_payload("[1, 2]", PASSCODE)

    def test_changes_not_an_object(self):
        with self.assertRaises(PayloadError):
            normalize_payload(self._event(changes=[]), PASSCODE)

    def test_asset_list_not_a_list(self):
        with self.assertRaises(PayloadError):
            normalize_payload(self._event(changes={"created_styles": "S1"}), PASSCODE)

    def test_asset_without_key(self):
        cases = [
            [{"name": "Primary"}],
            [{"name": "Primary", "key": ""}],
            [{"name": "Primary", "key": 7}],
            ["Primary"],
        ]
        for entries in cases:
            with self.subTest(entries=entries):
                with self.assertRaises(PayloadError):
                    normalize_payload(self._event(changes={"created_styles": entries}), PASSCODE)

    def test_asset_without_name(self):
        with self.assertRaises(PayloadError):
            normalize_payload(self._event(changes={"created_styles": [{"key": "S1"}]}), PASSCODE)

    def test_missing_file_key(self):
        event = self._event()
        del event["file_key"]
        with self.assertRaises(PayloadError):
            normalize_payload(event, PASSCODE)

    def test_unparsable_timestamp(self):
        with self.assertRaises(PayloadError):
            normalize_payload(self._event(timestamp="yesterday"), PASSCODE)


class TestParseTimestamp(unittest.TestCase):
    def test_iso_formats(self):
        expected = datetime(2026, 1, 2, 15, 30, tzinfo=timezone.utc)
        cases = [
            "2026-01-02T15:30:00Z",
            "2026-01-02T15:30:00+00:00",
            "2026-01-02T15:30:00",
            "2026-01-03T00:30:00+09:00",
        ]
        for value in cases:
            with self.subTest(value=value):
                self.assertEqual(parse_timestamp(value), expected)

    def test_fractional_seconds_of_any_precision(self):
        cases = {
            "2026-01-02T15:30:00.12Z": 120000,
            "2026-01-02T15:30:00.5+00:00": 500000,
            "2026-01-02T15:30:00.123456789Z": 123456,
        }
        for value, microsecond in cases.items():
            with self.subTest(value=value):
                self.assertEqual(
                    parse_timestamp(value),
                    datetime(2026, 1, 2, 15, 30, 0, microsecond, tzinfo=timezone.utc),
                )

    def test_offset_without_colon(self):
        self.assertEqual(
            parse_timestamp("2026-01-03T00:30:00+0900"),
            datetime(2026, 1, 2, 15, 30, tzinfo=timezone.utc),
        )

    def test_epoch_milliseconds(self):
        self.assertEqual(
            parse_timestamp(1767367800000),
            datetime(2026, 1, 2, 15, 30, tzinfo=timezone.utc),
        )

    def test_absent(self):
        self.assertIsNone(parse_timestamp(None))
        self.assertIsNone(parse_timestamp(""))

    def test_rejects_other_types(self):
        for value in (True, ["2026-01-02"], {"at": 1}):
            with self.subTest(value=value):
                with self.assertRaises(PayloadError):
                    parse_timestamp(value)


if __name__ == "__main__":
    unittest.main()
