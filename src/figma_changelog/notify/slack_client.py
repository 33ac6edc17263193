"""
Client for Slack incoming webhooks.

The rendered message is posted verbatim. Any non-2xx response raises a
:class:`SlackError`; there is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class SlackError(Exception):
    """Raised when posting to Slack fails."""

    pass


@dataclass
class SlackClient:
    """Poster for a single Slack incoming webhook.

    Parameters
    ----------
    webhook_url : str
        The incoming webhook URL.
    request_timeout : float, optional
        Timeout in seconds for the request. Defaults to 30 seconds.
    """

    webhook_url: str
    request_timeout: float = 30.0

    def post(self, payload: Dict[str, Any]) -> None:
        """Post ``payload`` as JSON to the webhook.

        Raises
        ------
        SlackError
            If the request fails or Slack rejects the message.
        """
        try:
            response = requests.post(
                self.webhook_url,
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to reach Slack: %s", exc)
            raise SlackError(f"Slack notification failed: {exc}") from exc
        if not 200 <= response.status_code < 300:
            logger.error(
                "Slack returned non-2xx status %s: %s", response.status_code, response.text
            )
            raise SlackError(
                f"Slack notification failed: {response.status_code} {response.text}"
            )
        logger.info("Slack notification sent")
