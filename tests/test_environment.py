"""Tests for startup discovery (infra/environment.py).

All tests pass an explicit environment mapping and mock
:func:`shutil.which` — no dependency on the host's java or clojure.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from deps_launcher.exceptions import EnvironmentDiscoveryError
from deps_launcher.infra.environment import (
    build_context,
    locate_install_dir,
    locate_java,
    locate_tools_classpath,
    resolve_cache_dir,
    resolve_config_dir,
    resolve_user_cache_dir,
)


def _executable(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


# ---------------------------------------------------------------------------
# java
# ---------------------------------------------------------------------------

class TestLocateJava:
    @patch("deps_launcher.infra.environment.shutil.which", return_value="/usr/bin/java")
    def test_found_on_path(self, _mock_which: object) -> None:
        assert locate_java({}) == "/usr/bin/java"

    @patch("deps_launcher.infra.environment.shutil.which", return_value=None)
    def test_java_home_fallback(self, _mock_which: object, tmp_path: Path) -> None:
        java = _executable(tmp_path / "jdk" / "bin" / "java")
        assert locate_java({"JAVA_HOME": str(tmp_path / "jdk")}) == str(java.resolve())

    @patch("deps_launcher.infra.environment.shutil.which", return_value=None)
    def test_missing_everywhere(self, _mock_which: object) -> None:
        with pytest.raises(EnvironmentDiscoveryError, match="Please set JAVA_HOME"):
            locate_java({})

    @patch("deps_launcher.infra.environment.shutil.which", return_value=None)
    def test_java_home_without_binary(self, _mock_which: object, tmp_path: Path) -> None:
        with pytest.raises(EnvironmentDiscoveryError, match="Couldn't find 'java'"):
            locate_java({"JAVA_HOME": str(tmp_path)})


# ---------------------------------------------------------------------------
# install dir and tools jar
# ---------------------------------------------------------------------------

class TestInstallDir:
    def test_two_levels_above_resolved_launcher(self, tmp_path: Path) -> None:
        launcher = _executable(tmp_path / "opt" / "clojure" / "bin" / "clojure")
        link_dir = tmp_path / "usr" / "local" / "bin"
        link_dir.mkdir(parents=True)
        (link_dir / "clojure").symlink_to(launcher)

        with patch(
            "deps_launcher.infra.environment.shutil.which",
            return_value=str(link_dir / "clojure"),
        ):
            assert locate_install_dir({}) == (tmp_path / "opt" / "clojure").resolve()

    @patch("deps_launcher.infra.environment.shutil.which", return_value=None)
    def test_missing_launcher(self, _mock_which: object) -> None:
        with pytest.raises(EnvironmentDiscoveryError) as exc_info:
            locate_install_dir({})
        assert exc_info.value.hint is not None

    def test_tools_jar(self, install_dir: Path) -> None:
        jar = locate_tools_classpath(install_dir)
        assert jar.endswith("clojure-tools-1.10.1.jar")

    def test_missing_tools_jar(self, tmp_path: Path) -> None:
        with pytest.raises(EnvironmentDiscoveryError, match="clojure-tools"):
            locate_tools_classpath(tmp_path)


# ---------------------------------------------------------------------------
# directories
# ---------------------------------------------------------------------------

class TestDirectories:
    def test_config_dir_override(self) -> None:
        env = {"CLJ_CONFIG": "/cfg", "XDG_CONFIG_HOME": "/xdg", "HOME": "/home/u"}
        assert resolve_config_dir(env) == Path("/cfg")

    def test_config_dir_xdg(self) -> None:
        assert resolve_config_dir({"XDG_CONFIG_HOME": "/xdg", "HOME": "/home/u"}) == Path(
            "/xdg/clojure"
        )

    def test_config_dir_home(self) -> None:
        assert resolve_config_dir({"HOME": "/home/u"}) == Path("/home/u/.clojure")

    def test_user_cache_override(self) -> None:
        env = {"CLJ_CACHE": "/c", "XDG_CACHE_HOME": "/xc"}
        assert resolve_user_cache_dir(env, Path("/cfg")) == Path("/c")

    def test_user_cache_xdg(self) -> None:
        assert resolve_user_cache_dir({"XDG_CACHE_HOME": "/xc"}, Path("/cfg")) == Path(
            "/xc/clojure"
        )

    def test_user_cache_under_config(self) -> None:
        assert resolve_user_cache_dir({}, Path("/cfg")) == Path("/cfg/.cpcache")

    def test_project_cache_when_deps_edn_present(self, tmp_path: Path) -> None:
        (tmp_path / "deps.edn").write_text("{}")
        assert resolve_cache_dir(tmp_path, Path("/user-cache")) == tmp_path / ".cpcache"

    def test_user_cache_without_deps_edn(self, tmp_path: Path) -> None:
        assert resolve_cache_dir(tmp_path, Path("/user-cache")) == Path("/user-cache")


# ---------------------------------------------------------------------------
# build_context
# ---------------------------------------------------------------------------

class TestBuildContext:
    def test_assembles_context(self, tmp_path: Path, install_dir: Path, project_dir: Path) -> None:
        java = _executable(tmp_path / "jdk" / "bin" / "java")
        launcher = _executable(install_dir / "bin" / "clojure")
        env = {
            "PATH": os.pathsep.join([str(java.parent), str(launcher.parent)]),
            "HOME": str(tmp_path / "home"),
        }

        context = build_context(env, project_dir)

        assert context.java_cmd == str(java)
        assert context.install_dir == install_dir.resolve()
        assert context.tools_cp.endswith("clojure-tools-1.10.1.jar")
        assert context.config_dir == tmp_path / "home" / ".clojure"
        assert context.cache_dir == tmp_path / "home" / ".clojure" / ".cpcache"
        assert context.cwd == project_dir
