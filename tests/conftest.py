import json

import pytest


CONFIG_ENV_VARS = (
    "FIGMA_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "SLACK_WEBHOOK_URL",
    "GITHUB_WORKSPACE",
    "WEBHOOK_PASSCODE",
    "CHANGELOG_BRANCH",
    "CHANGELOG_PATH",
    "REQUEST_TIMEOUT",
    "WEBHOOK_PAYLOAD",
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Remove any CI configuration inherited from the calling shell.

    Tests that need configuration set the variables they expect
    explicitly, so a developer's exported tokens never leak into a run.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def webhook_event():
    """A minimal authenticated LIBRARY_PUBLISH event."""
    return {
        "event_type": "LIBRARY_PUBLISH",
        "passcode": "ids-changelog-2026",
        "file_key": "FILE123",
        "file_name": "Design System",
        "timestamp": "2026-10-19T03:00:00Z",
        "triggered_by": {"id": "42", "handle": "Mina"},
        "changes": {
            "created_components": [],
            "created_styles": [],
            "created_variables": [],
            "modified_components": [],
            "modified_styles": [],
            "modified_variables": [],
            "deleted_components": [],
            "deleted_styles": [],
            "deleted_variables": [],
        },
    }


@pytest.fixture
def webhook_json(webhook_event):
    return json.dumps(webhook_event)
