"""Custom exception hierarchy for deps-launcher.

All exceptions that cross layer boundaries must inherit from
:class:`DepsLauncherError`.  Raw ``OSError`` from process spawning must
never propagate beyond the infrastructure layer — it is caught there and
re-raised as a typed subclass defined here.

Hierarchy
---------
DepsLauncherError
├── InvalidOptionError
├── MissingDepsFileError
├── EnvironmentDiscoveryError
└── ProcessFailedError
"""

from __future__ import annotations

from collections.abc import Sequence


class DepsLauncherError(Exception):
    """Base exception for all deps-launcher errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- User input ------------------------------------------------------------

class InvalidOptionError(DepsLauncherError):
    """Raised for an unrecognized ``-S`` option or a value flag without value."""


class MissingDepsFileError(DepsLauncherError):
    """Raised when an operation requires the project deps file and it is absent."""


# --- Environment discovery -------------------------------------------------

class EnvironmentDiscoveryError(DepsLauncherError):
    """Raised when java, the install directory or the tools jar cannot be found."""


# --- External processes ----------------------------------------------------

class ProcessFailedError(DepsLauncherError):
    """Raised when a child process exits with a non-zero code.

    The CLI boundary exits with :attr:`returncode` unchanged; the child
    has already written its own diagnostics to the inherited stderr.
    """

    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        super().__init__(f"Command exited with code {returncode}: {argv[0] if argv else ''}")
        self.argv: tuple[str, ...] = tuple(argv)
        self.returncode: int = returncode
