"""
Client for the Figma REST API.

Only the two metadata endpoints needed to build design links are
wrapped: ``/v1/components/:key`` and ``/v1/styles/:key``. On error
conditions (HTTP errors, timeouts, undecodable bodies) a
:class:`FigmaError` is raised; callers decide whether that is fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


FIGMA_API_URL = "https://api.figma.com"


class FigmaError(Exception):
    """Raised when a Figma API request fails."""

    pass


@dataclass
class FigmaClient:
    """Client for the Figma REST API.

    Parameters
    ----------
    token : str
        Personal access token, sent as the ``X-Figma-Token`` header.
    base_url : str, optional
        API root. Defaults to ``https://api.figma.com``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    token: str
    base_url: str = FIGMA_API_URL
    request_timeout: float = 30.0

    def get(self, path: str) -> Dict[str, Any]:
        """Fetch ``path`` and return the decoded JSON body.

        Raises
        ------
        FigmaError
            If the request fails or the server returns a non-200 status.
        """
        url = f"{self.base_url}{path}"
        logger.debug("Requesting Figma metadata: %s", url)
        try:
            response = requests.get(
                url,
                headers={"X-Figma-Token": self.token},
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            raise FigmaError(f"Figma API request failed: {path}: {exc}") from exc
        if response.status_code != 200:
            raise FigmaError(f"Figma API {response.status_code}: {path}")
        try:
            data = response.json()
        except ValueError as exc:
            raise FigmaError(f"Figma API returned invalid JSON: {path}") from exc
        if not isinstance(data, dict):
            raise FigmaError(f"Unexpected response structure from Figma: {path}")
        return data

    def get_component(self, key: str) -> Dict[str, Any]:
        return self.get(f"/v1/components/{key}")

    def get_style(self, key: str) -> Dict[str, Any]:
        return self.get(f"/v1/styles/{key}")
