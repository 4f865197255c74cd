"""Environment reports: the ``-Sdescribe`` record and the ``-Sverbose`` block.

Both are built from in-memory state and file-existence checks only; no
cache file is read, so they work with a stale or missing cache.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Union

from deps_launcher.core.models import CacheEntry, ConfigChain, Invocation, LaunchContext
from deps_launcher.version import __version__

EdnValue = Union[str, Path, None, Sequence[Union[str, Path]]]


def _edn(value: EdnValue) -> str:
    """Render *value* as an EDN literal (string, nil or vector of strings)."""
    if value is None:
        return "nil"
    if isinstance(value, (str, Path)):
        # JSON string escaping is a valid EDN string literal.
        return json.dumps(str(value), ensure_ascii=False)
    return "[" + " ".join(_edn(item) for item in value) + "]"


def _flag(value: bool) -> str:
    return "true" if value else ""


def describe_record(
    invocation: Invocation,
    context: LaunchContext,
    chain: ConfigChain,
) -> list[tuple[str, EdnValue]]:
    """Return the ordered ``(keyword, value)`` pairs of the describe record."""
    return [
        ("version", __version__),
        ("config-files", [str(path) for path in chain.existing()]),
        ("config-user", str(chain.user) if chain.user is not None else None),
        ("config-project", str(chain.project)),
        ("install-dir", str(context.install_dir)),
        ("cache-dir", str(context.cache_dir)),
        ("force", _flag(invocation.force)),
        ("repro", _flag(invocation.repro)),
        ("resolve-aliases", invocation.resolve_aliases),
        ("classpath-aliases", invocation.classpath_aliases),
        ("jvm-aliases", invocation.jvm_aliases),
        ("main-aliases", invocation.main_aliases),
        ("all-aliases", invocation.all_aliases),
    ]


def render_edn_map(pairs: Sequence[tuple[str, EdnValue]]) -> str:
    """Render *pairs* as an EDN map with one entry per line."""
    lines = [f":{keyword} {_edn(value)}" for keyword, value in pairs]
    return "{" + "\n ".join(lines) + "}"


def verbose_report(context: LaunchContext, chain: ConfigChain, entry: CacheEntry) -> str:
    """Return the aligned ``name = value`` block printed by ``-Sverbose``."""
    rows = [
        ("version", __version__),
        ("install_dir", str(context.install_dir)),
        ("config_dir", str(context.config_dir)),
        ("config_paths", " ".join(str(path) for path in chain.paths)),
        ("cache_dir", str(context.cache_dir)),
        ("cp_file", str(entry.cp_file)),
    ]
    width = max(len(name) for name, _ in rows)
    return "\n".join(f"{name:<{width}} = {value}" for name, value in rows) + "\n"
