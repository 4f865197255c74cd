"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the dispatch logic can be driven by mocks in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from deps_launcher.core.models import CacheEntry, ConfigChain


@dataclass(frozen=True, slots=True)
class ProcessOptions:
    """How a child process is wired to the launcher's standard streams."""

    capture_stdout: bool = False
    """Return stdout as text instead of inheriting the terminal."""

    input_text: str | None = None
    """Write this text to the child's stdin, then close it."""


class ProcessRunner(Protocol):
    """Contract for synchronous subprocess execution.

    stderr is always inherited.  stdin is inherited unless
    :attr:`ProcessOptions.input_text` is given.
    """

    def run(
        self,
        args: Sequence[str],
        options: ProcessOptions | None = None,
    ) -> str | None:
        """Run *args* to completion.

        Returns
        -------
        str | None
            Captured stdout when ``capture_stdout`` is set, else ``None``.

        Raises
        ------
        ProcessFailedError
            When the child exits with a non-zero code.
        EnvironmentDiscoveryError
            When the executable cannot be started.
        """
        ...  # pragma: no cover


class ClasspathResolver(Protocol):
    """Contract for the external ``clojure.tools.deps`` scripts."""

    def make_classpath(
        self,
        chain: ConfigChain,
        entry: CacheEntry,
        tools_args: Sequence[str],
    ) -> None:
        """Resolve deps and (over)write the four files of *entry*."""
        ...  # pragma: no cover

    def generate_manifest(self, chain: ConfigChain, tools_args: Sequence[str]) -> None:
        """Generate or update ``pom.xml`` in the working directory."""
        ...  # pragma: no cover

    def print_tree(self, entry: CacheEntry) -> str:
        """Return the dependency tree rendered from ``entry.libs_file``."""
        ...  # pragma: no cover

    def resolve_tags(self, deps_file: Path) -> None:
        """Resolve git tags to shas in place inside *deps_file*."""
        ...  # pragma: no cover
