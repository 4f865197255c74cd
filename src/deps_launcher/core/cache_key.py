"""Cache key computation.

The key names the cache artifact files, so it must be identical across
runs and machines for identical inputs.  Several projects share the user
cache directory when they have no ``deps.edn`` of their own, which is
why a SHA-256 digest is used rather than a small-range checksum.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from pathlib import Path

from deps_launcher.core.models import Invocation

MISSING_SENTINEL = "NIL"
KEY_LENGTH = 32


def cache_key_material(invocation: Invocation, config_paths: Iterable[Path]) -> str:
    """Return the ``|``-joined text the key is computed from.

    Each config path contributes its own string when the file exists and
    :data:`MISSING_SENTINEL` otherwise.
    """
    parts = [
        invocation.resolve_aliases,
        invocation.classpath_aliases,
        invocation.all_aliases,
        invocation.jvm_aliases,
        invocation.main_aliases,
        invocation.deps_data or "",
    ]
    parts.extend(str(path) if path.exists() else MISSING_SENTINEL for path in config_paths)
    return "|".join(parts)


def compute_cache_key(invocation: Invocation, config_paths: Iterable[Path]) -> str:
    """Return the short hex cache key for *invocation* and *config_paths*."""
    material = cache_key_material(invocation, config_paths)
    return hashlib.sha256(material.encode("utf-8")).hexdigest()[:KEY_LENGTH]
