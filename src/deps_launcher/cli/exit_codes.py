"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  A
failing child process is the one exception: its own exit code is
propagated verbatim.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error, or help was printed."""

GENERAL_ERROR: int = 1
"""A known DepsLauncherError was caught. User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
