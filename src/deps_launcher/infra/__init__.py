"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: executable
lookup, environment variables and child processes (java and the
``clojure.tools.deps`` scripts).

Rules
-----
* No imports from ``cli``.
* No user-facing output.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from deps_launcher.infra.environment import build_context
from deps_launcher.infra.process_runner import SubprocessRunner
from deps_launcher.infra.tools_resolver import ToolsDepsResolver

__all__: list[str] = [
    "SubprocessRunner",
    "ToolsDepsResolver",
    "build_context",
]
