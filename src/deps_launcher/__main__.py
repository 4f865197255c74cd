"""Allow ``python -m deps_launcher`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m deps_launcher`` behaves identically to the
``deps-launcher`` console script.
"""

from __future__ import annotations

from deps_launcher.cli.app import cli

if __name__ == "__main__":
    cli()
