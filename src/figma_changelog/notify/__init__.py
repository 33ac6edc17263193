"""
Notification delivery for figma_changelog.
"""

from .slack_client import SlackClient, SlackError  # noqa: F401
