"""Domain models for deps-launcher.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and path derivation.  They carry zero
dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Parsed command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Invocation:
    """Parsed representation of one launch.

    Alias strings accumulate by concatenation (``-M:a -M:b`` gives
    ``":a:b"``) and default to the empty string.
    """

    resolve_aliases: str = ""
    """``-R`` aliases passed to resolve-deps."""

    classpath_aliases: str = ""
    """``-C`` aliases passed to make-classpath."""

    jvm_aliases: str = ""
    """``-O`` aliases selecting JVM option fragments."""

    main_aliases: str = ""
    """``-M`` aliases selecting main option fragments."""

    all_aliases: str = ""
    """``-A`` aliases of any kind."""

    jvm_opts: tuple[str, ...] = ()
    """``-J`` options forwarded to the java command line, in encounter order."""

    print_classpath: bool = False
    verbose: bool = False
    trace: bool = False
    describe: bool = False
    force: bool = False
    repro: bool = False
    tree: bool = False
    pom: bool = False
    resolve_tags: bool = False
    help: bool = False

    deps_data: str | None = None
    """``-Sdeps`` EDN payload merged as the last deps source."""

    force_cp: str | None = None
    """``-Scp`` classpath that bypasses computation and cache."""

    deps_file: str | None = None
    """``-Sdeps-file`` replacement for the project ``deps.edn``."""

    command: str | None = None
    """``-Scommand`` template with ``{{classpath}}`` / ``{{main-opts}}``."""

    args: tuple[str, ...] = ()
    """Positional remainder forwarded verbatim to the runtime."""

    @property
    def aliases(self) -> dict[str, str]:
        """Alias strings keyed by category name."""
        return {
            "resolve": self.resolve_aliases,
            "classpath": self.classpath_aliases,
            "jvm": self.jvm_aliases,
            "main": self.main_aliases,
            "all": self.all_aliases,
        }


# ---------------------------------------------------------------------------
# Config chain
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigChain:
    """Ordered deps files handed to the resolver (later wins on merge)."""

    install: Path
    user: Path | None
    project: Path

    @property
    def paths(self) -> tuple[Path, ...]:
        """Two paths in reproducible mode, three otherwise."""
        if self.user is None:
            return (self.install, self.project)
        return (self.install, self.user, self.project)

    def existing(self) -> tuple[Path, ...]:
        """Chain paths that currently exist on disk."""
        return tuple(path for path in self.paths if path.exists())


# ---------------------------------------------------------------------------
# Cache artifacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CacheEntry:
    """The four cache artifact files named by one cache key."""

    key: str
    libs_file: Path
    cp_file: Path
    jvm_file: Path
    main_file: Path

    @classmethod
    def for_key(cls, cache_dir: Path, key: str) -> CacheEntry:
        return cls(
            key=key,
            libs_file=cache_dir / f"{key}.libs",
            cp_file=cache_dir / f"{key}.cp",
            jvm_file=cache_dir / f"{key}.jvm",
            main_file=cache_dir / f"{key}.main",
        )


# ---------------------------------------------------------------------------
# Startup environment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LaunchContext:
    """Process-wide facts computed once at startup and injected everywhere."""

    java_cmd: str
    """Absolute path of the java executable."""

    install_dir: Path
    """Install root of the ``clojure`` launcher (two levels above it)."""

    tools_cp: str
    """Path of the ``clojure-tools`` jar used to run resolver scripts."""

    config_dir: Path
    """User config directory holding the user ``deps.edn``."""

    user_cache_dir: Path
    """Cache directory used outside of a project."""

    cache_dir: Path
    """Effective cache directory for this run."""

    cwd: Path
    """Working directory the project deps file is resolved against."""
