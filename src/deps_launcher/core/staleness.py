"""Decide whether the cached classpath must be recomputed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from deps_launcher.core.models import Invocation

logger = logging.getLogger(__name__)


def is_stale(invocation: Invocation, config_paths: Iterable[Path], cp_file: Path) -> bool:
    """Return ``True`` when the resolver has to run again.

    Any doubt counts as stale: a forced or traced run, a missing cp file,
    a missing config file, or a config file modified after the cp file.
    """
    if invocation.force or invocation.trace:
        return True
    if not cp_file.exists():
        logger.debug("Cache file %s does not exist", cp_file)
        return True

    cp_mtime = cp_file.stat().st_mtime_ns
    for path in config_paths:
        if not path.exists():
            logger.debug("Config file %s is missing", path)
            return True
        if path.stat().st_mtime_ns > cp_mtime:
            logger.debug("Config file %s is newer than %s", path, cp_file)
            return True
    return False
