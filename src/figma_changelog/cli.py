"""
Command line interface for the figma_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``figma-changelog`` command from CI. It
orchestrates webhook validation, configuration loading, the Figma
metadata lookups, report building, the changelog commit and the Slack
notification. Exit codes are listed below; ignored webhooks (pings and
wrong passcodes) exit successfully without side effects.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click

from figma_changelog import __version__
from figma_changelog.config.loader import ConfigError, load_config, load_passcode
from figma_changelog.figma.client import FigmaClient
from figma_changelog.figma.resolver import resolve_change_set
from figma_changelog.notify.slack_client import SlackClient, SlackError
from figma_changelog.render.changelog import render_changelog, update_changelog
from figma_changelog.render.slack import render_notification
from figma_changelog.report import build_report
from figma_changelog.vcs.github_client import GitHubClient, GitHubError
from figma_changelog.vcs.workspace import ChangelogError, read_changelog
from figma_changelog.versioning.semver import read_current_version
from figma_changelog.webhook.payload import PayloadError, normalize_payload

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_PAYLOAD = 2
EXIT_CHANGELOG_ERROR = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_NOTIFY_FAILURE = 7


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for CI log feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def read_payload(payload: Optional[str], payload_file: Optional[Path]) -> str:
    """Return the raw webhook body from ``--payload-file`` or ``--payload``.

    Raises
    ------
    PayloadError
        If neither source provides a body.
    """
    if payload_file is not None:
        try:
            return payload_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise PayloadError(f"Cannot read payload file {payload_file}: {exc}") from exc
    if payload:
        return payload
    raise PayloadError("No webhook payload given (use --payload, --payload-file or WEBHOOK_PAYLOAD)")


@click.command()
@click.option("--payload", envvar="WEBHOOK_PAYLOAD", help="Webhook body as JSON (defaults to $WEBHOOK_PAYLOAD).")
@click.option(
    "--payload-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read the webhook body from a file instead.",
)
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON settings file (defaults to .changelog_config.json in the workspace).",
)
@click.option("--dry-run", is_flag=True, help="Print the changelog and Slack message without committing or posting.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="figma-changelog")
def main(
    payload: Optional[str],
    payload_file: Optional[Path],
    config_file: Optional[Path],
    dry_run: bool,
    verbose: bool,
) -> None:
    """Publish a changelog entry and a Slack message for a Figma library update."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    total_steps = 7
    current_step = 0

    try:
        # Step 1: Validate webhook
        current_step += 1
        print_step(current_step, total_steps, "Validating Webhook")

        try:
            passcode = load_passcode(config_file=config_file)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        try:
            change_set = normalize_payload(read_payload(payload, payload_file), passcode)
        except PayloadError as exc:
            print_error(f"Invalid webhook payload: {exc}")
            raise click.exceptions.Exit(EXIT_INVALID_PAYLOAD)

        if change_set is None:
            print_info("Webhook ignored (ping or invalid passcode); nothing to do.")
            raise click.exceptions.Exit(EXIT_SUCCESS)

        print_success(f"Library update for file {change_set.file_key}")

        # Step 2: Load configuration
        current_step += 1
        print_step(current_step, total_steps, "Loading Configuration")

        try:
            config = load_config(config_file=config_file)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        print_success("Configuration loaded successfully")
        print_info(f"Repository: {config.github_repository} ({config.branch})", indent=1)
        print_info(f"Changelog: {config.changelog_path}", indent=1)

        # Step 3: Read current changelog
        current_step += 1
        print_step(current_step, total_steps, "Reading Changelog")

        try:
            changelog_content = read_changelog(config.changelog_file)
        except ChangelogError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_CHANGELOG_ERROR)

        current_version = read_current_version(changelog_content)
        print_success(f"Current version: {current_version}")

        # Step 4: Fetch Figma metadata
        current_step += 1
        print_step(current_step, total_steps, "Fetching Figma Metadata")

        figma_client = FigmaClient(config.figma_token, request_timeout=config.request_timeout)
        with ProgressIndicator("Looking up component and style metadata"):
            component_meta, style_meta = resolve_change_set(
                figma_client, change_set, max_workers=config.max_workers
            )
        failures = sum(
            1 for record in list(component_meta.values()) + list(style_meta.values()) if record.error
        )
        print_success(
            f"Fetched: {len(component_meta)} component metas, {len(style_meta)} style metas"
        )
        if failures:
            print_warning(f"{failures} lookup(s) failed; those items are listed without links", indent=1)

        # Step 5: Build report
        current_step += 1
        print_step(current_step, total_steps, "Building Report")

        report = build_report(
            change_set,
            current_version,
            component_meta,
            style_meta,
            received_at=datetime.now(timezone.utc),
        )
        section = render_changelog(report)
        updated_changelog = update_changelog(changelog_content, section)
        notification = render_notification(report, config.changelog_url)
        print_success(f"New version: {report.version}")

        if dry_run:
            click.echo("\n" + section.rstrip())
            click.echo("\n" + json.dumps(notification, ensure_ascii=False, indent=2))
            print_warning("Dry run: changelog not committed, Slack not notified")
            raise click.exceptions.Exit(EXIT_SUCCESS)

        # Step 6: Commit changelog
        current_step += 1
        print_step(current_step, total_steps, "Committing Changelog")

        owner, repo = config.repo_owner_and_name
        github_client = GitHubClient(
            config.github_token, owner, repo, request_timeout=config.request_timeout
        )
        try:
            with ProgressIndicator(f"Committing {config.changelog_path} to {config.branch}"):
                commit_sha = github_client.commit_file(
                    config.branch, config.changelog_path, updated_changelog, report.version
                )
        except GitHubError as exc:
            print_error(f"Failed to commit changelog: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_success(f"Committed {report.version}: {commit_sha}")

        # Step 7: Notify Slack
        current_step += 1
        print_step(current_step, total_steps, "Notifying Slack")

        try:
            with ProgressIndicator("Posting release message"):
                SlackClient(config.slack_webhook_url, request_timeout=config.request_timeout).post(
                    notification
                )
        except SlackError as exc:
            print_error(f"Slack notification failed: {exc}")
            raise click.exceptions.Exit(EXIT_NOTIFY_FAILURE)

        print_success(f"Released {report.previous_version} → {report.version}")
        print_info(f"Commit: {commit_sha[:7]}", indent=1)
        print_info(f"Published by: {report.triggered_by or 'Unknown'}", indent=1)

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
