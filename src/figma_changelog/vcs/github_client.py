"""
GitHub client implementation for figma_changelog.

This module wraps the git data API calls needed to commit a single file
to a branch without a local checkout: read the branch head, create a
blob and a tree on top of the head's tree, create a commit and move the
branch to it. The branch update is not forced, so a concurrent push
makes it fail instead of being overwritten.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


GITHUB_API_URL = "https://api.github.com"


class GitHubError(Exception):
    """Raised when a GitHub API call fails."""

    pass


@dataclass
class GitHubClient:
    """Client for the GitHub git data API of one repository.

    Parameters
    ----------
    token : str
        Token with contents write access.
    owner : str
        Repository owner.
    repo : str
        Repository name.
    api_url : str, optional
        API root. Defaults to ``https://api.github.com``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    token: str
    owner: str
    repo: str
    api_url: str = GITHUB_API_URL
    request_timeout: float = 30.0

    # ------------------------------------------------------------------
    # Basic API access
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a request relative to the repository and return the JSON body.

        Raises
        ------
        GitHubError
            If the request fails or the server returns a non-2xx status.
        """
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}{path}"
        logger.debug("GitHub API %s %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                },
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("GitHub API request failed: %s", exc)
            raise GitHubError(f"GitHub API request failed: {method} {path}: {exc}") from exc
        if not 200 <= response.status_code < 300:
            logger.error(
                "GitHub API returned %s for %s %s: %s",
                response.status_code,
                method,
                path,
                response.text,
            )
            raise GitHubError(
                f"GitHub API {response.status_code}: {method} {path}: {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubError(f"GitHub API returned invalid JSON: {method} {path}") from exc

    # ------------------------------------------------------------------
    # Git data operations
    # ------------------------------------------------------------------
    def get_branch_head(self, branch: str) -> str:
        data = self._request("GET", f"/git/ref/heads/{branch}")
        return data["object"]["sha"]

    def get_commit_tree(self, commit_sha: str) -> str:
        data = self._request("GET", f"/git/commits/{commit_sha}")
        return data["tree"]["sha"]

    def create_blob(self, content: str) -> str:
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        data = self._request("POST", "/git/blobs", {"content": encoded, "encoding": "base64"})
        return data["sha"]

    def create_tree(self, base_tree: str, path: str, blob_sha: str) -> str:
        data = self._request(
            "POST",
            "/git/trees",
            {
                "base_tree": base_tree,
                "tree": [{"path": path, "mode": "100644", "type": "blob", "sha": blob_sha}],
            },
        )
        return data["sha"]

    def create_commit(self, message: str, tree_sha: str, parent_sha: str) -> str:
        data = self._request(
            "POST",
            "/git/commits",
            {"message": message, "tree": tree_sha, "parents": [parent_sha]},
        )
        return data["sha"]

    def update_branch(self, branch: str, commit_sha: str) -> None:
        self._request("PATCH", f"/git/refs/heads/{branch}", {"sha": commit_sha})

    def commit_file(self, branch: str, path: str, content: str, message: str) -> str:
        """Commit ``content`` as ``path`` on top of ``branch``.

        Returns
        -------
        str
            SHA of the new commit.
        """
        head_sha = self.get_branch_head(branch)
        base_tree = self.get_commit_tree(head_sha)
        blob_sha = self.create_blob(content)
        tree_sha = self.create_tree(base_tree, path, blob_sha)
        commit_sha = self.create_commit(message, tree_sha, head_sha)
        self.update_branch(branch, commit_sha)
        logger.info("Committed %s: %s", message, commit_sha)
        return commit_sha
