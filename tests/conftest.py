"""Shared pytest fixtures and configuration for the deps-launcher test suite.

Guidelines
----------
* No JVM and no Clojure install — the resolver and runner are mocked at
  the protocol boundary.
* Filesystem state lives under ``tmp_path`` only.
* Tests must not depend on the real environment variables.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from deps_launcher.core.dispatch import DispatchEngine
from deps_launcher.core.models import CacheEntry, LaunchContext


@pytest.fixture()
def install_dir(tmp_path: Path) -> Path:
    """A fake Clojure install: defaults, example config and tools jar."""
    root = tmp_path / "install"
    (root / "libexec").mkdir(parents=True)
    (root / "deps.edn").write_text("{:paths [\"src\"]}\n")
    (root / "example-deps.edn").write_text("{:aliases {}}\n")
    (root / "libexec" / "clojure-tools-1.10.1.jar").write_text("")
    return root


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def context(tmp_path: Path, install_dir: Path, project_dir: Path) -> LaunchContext:
    config_dir = tmp_path / "home" / ".clojure"
    user_cache_dir = tmp_path / "cache"
    return LaunchContext(
        java_cmd="/usr/bin/java",
        install_dir=install_dir,
        tools_cp=str(install_dir / "libexec" / "clojure-tools-1.10.1.jar"),
        config_dir=config_dir,
        user_cache_dir=user_cache_dir,
        cache_dir=user_cache_dir,
        cwd=project_dir,
    )


def write_cache_entry(
    entry: CacheEntry,
    *,
    classpath: str = "src:/m2/clojure-1.10.1.jar",
    jvm_opts: str | None = None,
    main_opts: str | None = None,
) -> None:
    """Write cache artifacts the way make-classpath would."""
    entry.cp_file.parent.mkdir(parents=True, exist_ok=True)
    entry.libs_file.write_text("{org.clojure/clojure {:mvn/version \"1.10.1\"}}")
    entry.cp_file.write_text(classpath)
    if jvm_opts is not None:
        entry.jvm_file.write_text(jvm_opts)
    if main_opts is not None:
        entry.main_file.write_text(main_opts)


@pytest.fixture()
def resolver() -> MagicMock:
    """Resolver mock whose make_classpath writes a plain cache entry."""
    mock = MagicMock()
    mock.make_classpath.side_effect = lambda chain, entry, tools_args: write_cache_entry(entry)
    mock.print_tree.return_value = "org.clojure/clojure 1.10.1\n\n"
    return mock


@pytest.fixture()
def runner() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def output() -> list[str]:
    return []


@pytest.fixture()
def engine(
    context: LaunchContext,
    resolver: MagicMock,
    runner: MagicMock,
    output: list[str],
) -> DispatchEngine:
    return DispatchEngine(context, resolver, runner, output.append)


@pytest.fixture()
def cache_writer():
    """Return :func:`write_cache_entry` for tests that pre-populate the cache."""
    return write_cache_entry
