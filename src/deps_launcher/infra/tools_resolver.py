"""``clojure.tools.deps`` backed implementation of :class:`~deps_launcher.core.protocols.ClasspathResolver`.

Each operation runs one script of the tools jar through
``java -classpath <tools jar> clojure.main -m <script>`` and blocks until
it exits.  Failures surface as
:class:`~deps_launcher.exceptions.ProcessFailedError` from the runner.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from deps_launcher.core.models import CacheEntry, ConfigChain
from deps_launcher.core.protocols import ProcessOptions, ProcessRunner

logger = logging.getLogger(__name__)

SCRIPT_NAMESPACE = "clojure.tools.deps.alpha.script"
TOOLS_HEAP = "-Xms256m"


class ToolsDepsResolver:
    """Concrete :class:`ClasspathResolver` driving the tools jar scripts.

    Parameters
    ----------
    runner:
        Process runner used for every script invocation.
    java_cmd:
        java executable.
    tools_cp:
        Classpath of the ``clojure-tools`` jar.
    """

    def __init__(self, runner: ProcessRunner, java_cmd: str, tools_cp: str) -> None:
        self._runner = runner
        self._java_cmd = java_cmd
        self._tools_cp = tools_cp

    def script_command(self, script: str, *script_args: str) -> list[str]:
        """Return the java command line running ``<namespace>.<script>``."""
        return [
            self._java_cmd,
            TOOLS_HEAP,
            "-classpath",
            self._tools_cp,
            "clojure.main",
            "-m",
            f"{SCRIPT_NAMESPACE}.{script}",
            *script_args,
        ]

    @staticmethod
    def _config_args(chain: ConfigChain) -> list[str]:
        # Reproducible runs pass an empty user config.
        return [
            "--config-user",
            str(chain.user) if chain.user is not None else "",
            "--config-project",
            str(chain.project),
        ]

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def make_classpath(
        self,
        chain: ConfigChain,
        entry: CacheEntry,
        tools_args: Sequence[str],
    ) -> None:
        logger.debug("Refreshing cache entry %s", entry.key)
        self._runner.run(
            self.script_command(
                "make-classpath2",
                *self._config_args(chain),
                "--libs-file", str(entry.libs_file),
                "--cp-file", str(entry.cp_file),
                "--jvm-file", str(entry.jvm_file),
                "--main-file", str(entry.main_file),
                *tools_args,
            )
        )

    def generate_manifest(self, chain: ConfigChain, tools_args: Sequence[str]) -> None:
        self._runner.run(
            self.script_command(
                "generate-manifest2",
                *self._config_args(chain),
                "--gen=pom",
                *tools_args,
            )
        )

    def print_tree(self, entry: CacheEntry) -> str:
        output = self._runner.run(
            self.script_command("print-tree", "--libs-file", str(entry.libs_file)),
            ProcessOptions(capture_stdout=True),
        )
        return output or ""

    def resolve_tags(self, deps_file: Path) -> None:
        self._runner.run(self.script_command("resolve-tags", f"--deps-file={deps_file}"))
