"""
Configuration loader for figma_changelog.

Settings are assembled from three layers, lowest precedence first:

1. built-in defaults,
2. an optional JSON settings file (``.changelog_config.json`` in the
   workspace root, or an explicit path),
3. environment variables.

Secrets (API tokens and the Slack webhook URL) are only ever read from
the environment. The resulting :class:`AppConfig` is immutable and is
passed explicitly to each collaborator; nothing downstream reads
``os.environ`` on its own.

If the settings file is malformed, a required variable is missing, or a
value has the wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = ".changelog_config.json"

DEFAULT_PASSCODE = "ids-changelog-2026"
DEFAULT_BRANCH = "main"
DEFAULT_CHANGELOG_PATH = "changelog/CHANGELOG.md"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_WORKERS = 8

# Environment variable -> AppConfig field
REQUIRED_ENV = {
    "FIGMA_TOKEN": "figma_token",
    "GITHUB_TOKEN": "github_token",
    "GITHUB_REPOSITORY": "github_repository",
    "SLACK_WEBHOOK_URL": "slack_webhook_url",
}
OPTIONAL_ENV = {
    "WEBHOOK_PASSCODE": "passcode",
    "CHANGELOG_BRANCH": "branch",
    "CHANGELOG_PATH": "changelog_path",
    "REQUEST_TIMEOUT": "request_timeout",
}
FILE_KEYS = {"passcode", "branch", "changelog_path", "request_timeout", "max_workers"}


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class AppConfig:
    """Settings for one report run.

    Attributes
    ----------
    figma_token : str
        Personal access token sent as ``X-Figma-Token``.
    github_token : str
        Token used for the git data API.
    github_repository : str
        Target repository in ``owner/repo`` form.
    slack_webhook_url : str
        Incoming webhook the notification is posted to.
    workspace : Path
        Checkout root containing the changelog file.
    passcode : str
        Shared secret the webhook must carry.
    branch : str
        Branch the changelog commit is pushed to.
    changelog_path : str
        Changelog location relative to the repository root.
    request_timeout : float
        Timeout in seconds for every outbound HTTP request.
    max_workers : int
        Upper bound on concurrent Figma lookups.
    """

    figma_token: str
    github_token: str
    github_repository: str
    slack_webhook_url: str
    workspace: Path
    passcode: str = DEFAULT_PASSCODE
    branch: str = DEFAULT_BRANCH
    changelog_path: str = DEFAULT_CHANGELOG_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def repo_owner_and_name(self) -> Tuple[str, str]:
        owner, _, repo = self.github_repository.partition("/")
        return owner, repo

    @property
    def changelog_file(self) -> Path:
        return self.workspace / self.changelog_path

    @property
    def changelog_url(self) -> str:
        """Browser URL of the changelog on the target branch."""
        owner, repo = self.repo_owner_and_name
        return f"https://github.com/{owner}/{repo}/blob/{self.branch}/{self.changelog_path}"


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse settings file: %s", exc)
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")
    unknown = sorted(set(data) - FILE_KEYS)
    if unknown:
        raise ConfigError(f"Unsupported keys in {path.name}: {', '.join(unknown)}")
    logger.debug("Loaded settings file: %s", path)
    return data


def _coerce_timeout(value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError("'request_timeout' must be a number")
    if isinstance(value, (int, float)):
        timeout = float(value)
    elif isinstance(value, str):
        try:
            timeout = float(value)
        except ValueError as exc:
            raise ConfigError("'request_timeout' must be a number") from exc
    else:
        raise ConfigError("'request_timeout' must be a number")
    if timeout <= 0:
        raise ConfigError("'request_timeout' must be positive")
    return timeout


def _load_settings(
    env: Mapping[str, str], config_file: Optional[Path]
) -> Tuple[Path, Dict[str, Any]]:
    """Merge the settings file and the optional variables, then validate them."""
    workspace = Path(env.get("GITHUB_WORKSPACE") or Path.cwd())

    settings: Dict[str, Any] = {}
    if config_file is not None:
        if not config_file.exists():
            raise ConfigError(f"Settings file not found: {config_file}")
        settings.update(_read_config_file(config_file))
    elif (workspace / CONFIG_FILE_NAME).exists():
        settings.update(_read_config_file(workspace / CONFIG_FILE_NAME))

    for name, field_name in OPTIONAL_ENV.items():
        if env.get(name):
            settings[field_name] = env[name]

    for key in ("passcode", "branch", "changelog_path"):
        if key in settings and not isinstance(settings[key], str):
            raise ConfigError(f"'{key}' must be a string")
    if "request_timeout" in settings:
        settings["request_timeout"] = _coerce_timeout(settings["request_timeout"])
    if "max_workers" in settings:
        workers = settings["max_workers"]
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError("'max_workers' must be a positive integer")
    return workspace, settings


def load_passcode(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> str:
    """Return the webhook passcode without requiring any secret.

    The passcode is resolved like every other setting (default, then
    settings file, then ``WEBHOOK_PASSCODE``), so ignorable webhooks can
    be recognised before the tokens are checked.

    Raises:
        ConfigError: If the settings file is malformed.
    """
    env = os.environ if environ is None else environ
    _, settings = _load_settings(env, config_file)
    return settings.get("passcode", DEFAULT_PASSCODE)


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> AppConfig:
    """Build the :class:`AppConfig` for this run.

    Args:
        environ: Mapping to read variables from. Defaults to ``os.environ``.
        config_file: Explicit settings file. When omitted,
                     ``<workspace>/.changelog_config.json`` is used if it exists.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If required variables are missing, the settings file
                     is malformed, or a value has the wrong type.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV if not env.get(name)]
    if missing:
        logger.error("Missing required environment variables: %s", missing)
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    workspace, settings = _load_settings(env, config_file)

    repository = env["GITHUB_REPOSITORY"]
    owner, _, repo = repository.partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigError(
            f"'GITHUB_REPOSITORY' must look like 'owner/repo', got {repository!r}"
        )

    config = AppConfig(
        figma_token=env["FIGMA_TOKEN"],
        github_token=env["GITHUB_TOKEN"],
        github_repository=repository,
        slack_webhook_url=env["SLACK_WEBHOOK_URL"],
        workspace=workspace,
        **settings,
    )
    logger.debug(
        "Loaded configuration: repository=%s branch=%s changelog=%s",
        config.github_repository,
        config.branch,
        config.changelog_path,
    )
    return config
