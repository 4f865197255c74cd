"""Infrastructure: startup discovery of tools and directories.

Everything here is computed once per process and collected into a
:class:`~deps_launcher.core.models.LaunchContext`.  Functions take the
environment mapping and working directory explicitly so tests never
have to touch ``os.environ``.

Rules
-----
* Executable lookup via :func:`shutil.which` only — no subprocess.
* Discovery failures raise
  :class:`~deps_launcher.exceptions.EnvironmentDiscoveryError` before any
  dispatch happens.
* No user-facing output.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from deps_launcher.core.config_chain import DEPS_FILE_NAME
from deps_launcher.core.models import LaunchContext
from deps_launcher.exceptions import EnvironmentDiscoveryError

LAUNCHER_NAME = "clojure"
TOOLS_JAR_PREFIX = "clojure-tools"
PROJECT_CACHE_DIR_NAME = ".cpcache"


# ---------------------------------------------------------------------------
# Executables
# ---------------------------------------------------------------------------

def locate_java(env: Mapping[str, str]) -> str:
    """Return ``java`` from PATH, falling back to ``$JAVA_HOME/bin/java``."""
    found = shutil.which("java", path=env.get("PATH"))
    if found:
        return found

    hint = "Install a JDK or point JAVA_HOME at one."
    java_home = env.get("JAVA_HOME", "").strip()
    if not java_home:
        raise EnvironmentDiscoveryError("Couldn't find 'java'. Please set JAVA_HOME.", hint=hint)

    candidate = Path(java_home) / "bin" / "java"
    if candidate.is_file() and os.access(candidate, os.X_OK):
        return str(candidate.resolve())
    raise EnvironmentDiscoveryError("Couldn't find 'java'. Please set JAVA_HOME.", hint=hint)


def locate_install_dir(env: Mapping[str, str]) -> Path:
    """Return the install root: the resolved ``clojure`` launcher, two levels up."""
    launcher = shutil.which(LAUNCHER_NAME, path=env.get("PATH"))
    if launcher is None:
        raise EnvironmentDiscoveryError(
            f"Couldn't find '{LAUNCHER_NAME}' on PATH.",
            hint="Install the Clojure CLI tools: https://clojure.org/guides/install_clojure",
        )
    return Path(launcher).resolve().parent.parent


def locate_tools_classpath(install_dir: Path) -> str:
    """Return the ``clojure-tools`` jar under ``<install>/libexec``."""
    libexec = install_dir / "libexec"
    jars = sorted(libexec.glob(f"{TOOLS_JAR_PREFIX}*.jar")) if libexec.is_dir() else []
    if not jars:
        raise EnvironmentDiscoveryError(
            f"No {TOOLS_JAR_PREFIX}*.jar found in {libexec}.",
            hint="Reinstall the Clojure CLI tools.",
        )
    return str(jars[0].resolve())


# ---------------------------------------------------------------------------
# Directories
# ---------------------------------------------------------------------------

def _home(env: Mapping[str, str]) -> Path:
    home = env.get("HOME")
    return Path(home) if home else Path.home()


def resolve_config_dir(env: Mapping[str, str]) -> Path:
    """``$CLJ_CONFIG``, then ``$XDG_CONFIG_HOME/clojure``, then ``~/.clojure``."""
    if env.get("CLJ_CONFIG"):
        return Path(env["CLJ_CONFIG"])
    if env.get("XDG_CONFIG_HOME"):
        return Path(env["XDG_CONFIG_HOME"]) / "clojure"
    return _home(env) / ".clojure"


def resolve_user_cache_dir(env: Mapping[str, str], config_dir: Path) -> Path:
    """``$CLJ_CACHE``, then ``$XDG_CACHE_HOME/clojure``, then ``<config>/.cpcache``."""
    if env.get("CLJ_CACHE"):
        return Path(env["CLJ_CACHE"])
    if env.get("XDG_CACHE_HOME"):
        return Path(env["XDG_CACHE_HOME"]) / "clojure"
    return config_dir / PROJECT_CACHE_DIR_NAME


def resolve_cache_dir(cwd: Path, user_cache_dir: Path) -> Path:
    """Project-local ``.cpcache`` when *cwd* holds a ``deps.edn``."""
    if (cwd / DEPS_FILE_NAME).exists():
        return cwd / PROJECT_CACHE_DIR_NAME
    return user_cache_dir


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

def build_context(env: Mapping[str, str], cwd: Path) -> LaunchContext:
    """Discover tools and directories for one run.

    Raises
    ------
    EnvironmentDiscoveryError
        When java, the install directory or the tools jar is missing.
    """
    java_cmd = locate_java(env)
    install_dir = locate_install_dir(env)
    tools_cp = locate_tools_classpath(install_dir)
    config_dir = resolve_config_dir(env)
    user_cache_dir = resolve_user_cache_dir(env, config_dir)
    return LaunchContext(
        java_cmd=java_cmd,
        install_dir=install_dir,
        tools_cp=tools_cp,
        config_dir=config_dir,
        user_cache_dir=user_cache_dir,
        cache_dir=resolve_cache_dir(cwd, user_cache_dir),
        cwd=cwd,
    )
