"""Config-file chaining: install defaults, user config, project config.

The engine never reads or merges deps files; it only decides which files
the resolver merges and in what order (later wins).
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from deps_launcher.core.models import ConfigChain

logger = logging.getLogger(__name__)

DEPS_FILE_NAME = "deps.edn"
EXAMPLE_DEPS_FILE_NAME = "example-deps.edn"


def project_deps_file(cwd: Path, deps_file: str | None) -> Path:
    """Return the project deps file, ``-Sdeps-file`` or ``deps.edn`` in *cwd*."""
    return cwd / (deps_file or DEPS_FILE_NAME)


def resolve_config_chain(
    install_dir: Path,
    config_dir: Path,
    project_file: Path,
    *,
    repro: bool,
) -> ConfigChain:
    """Build the ordered chain; reproducible mode leaves out the user file."""
    return ConfigChain(
        install=install_dir / DEPS_FILE_NAME,
        user=None if repro else config_dir / DEPS_FILE_NAME,
        project=project_file,
    )


def seed_user_config(config_dir: Path, install_dir: Path) -> None:
    """Create *config_dir* and seed its ``deps.edn`` on first run.

    The seed is copied from ``example-deps.edn`` at the install location.
    An install without the template only gets the directory.
    """
    if not config_dir.exists():
        logger.debug("Creating user config directory %s", config_dir)
        config_dir.mkdir(parents=True, exist_ok=True)

    user_deps = config_dir / DEPS_FILE_NAME
    if user_deps.exists():
        return

    template = install_dir / EXAMPLE_DEPS_FILE_NAME
    if not template.is_file():
        logger.warning("No %s at %s; user config not seeded", EXAMPLE_DEPS_FILE_NAME, install_dir)
        return

    logger.debug("Seeding %s from %s", user_deps, template)
    shutil.copyfile(template, user_deps)
