#!/usr/bin/env python
"""
Thin wrapper script to invoke the figma_changelog CLI.

Running ``python deploy_report.py`` is equivalent to running the
``figma-changelog`` console script installed via ``pyproject.toml``.
"""

from figma_changelog.cli import main


if __name__ == "__main__":
    main(prog_name="figma-changelog")
