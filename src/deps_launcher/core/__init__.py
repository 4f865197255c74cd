"""Core layer — invocation parsing, cache keys, staleness and dispatch.

Rules
-----
* No imports from ``cli`` or ``infra``.
* No child processes — those go through the ``ProcessRunner`` protocol.
* No ``print()``; program output goes through an injected callable.
"""

from deps_launcher.core.arguments import parse_args
from deps_launcher.core.cache_key import compute_cache_key
from deps_launcher.core.dispatch import Action, DispatchEngine, select_action
from deps_launcher.core.models import CacheEntry, ConfigChain, Invocation, LaunchContext
from deps_launcher.core.protocols import ClasspathResolver, ProcessOptions, ProcessRunner
from deps_launcher.core.staleness import is_stale

__all__: list[str] = [
    "Action",
    "CacheEntry",
    "ClasspathResolver",
    "ConfigChain",
    "DispatchEngine",
    "Invocation",
    "LaunchContext",
    "ProcessOptions",
    "ProcessRunner",
    "compute_cache_key",
    "is_stale",
    "parse_args",
    "select_action",
]
