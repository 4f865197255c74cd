"""Dispatch engine — selects and performs exactly one terminal action.

Flow for one invocation:

1. ``-Sresolve-tags`` short-circuits everything else.
2. Seed the user config, build the config chain and derive the cache
   entry from the cache key.
3. Refresh the cache through the resolver when it is stale, unless the
   chosen action does not depend on resolved content.
4. Run the first matching action in :class:`Action` order.

Output meant for the user's stdout goes through the injected *emit*
callable; every child process goes through the injected
:class:`~deps_launcher.core.protocols.ProcessRunner`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from deps_launcher.core.cache_key import compute_cache_key
from deps_launcher.core.config_chain import (
    project_deps_file,
    resolve_config_chain,
    seed_user_config,
)
from deps_launcher.core.describe import describe_record, render_edn_map, verbose_report
from deps_launcher.core.models import CacheEntry, ConfigChain, Invocation, LaunchContext
from deps_launcher.core.protocols import ClasspathResolver, ProcessRunner
from deps_launcher.core.staleness import is_stale
from deps_launcher.exceptions import InvalidOptionError, MissingDepsFileError

logger = logging.getLogger(__name__)

CLASSPATH_PLACEHOLDER = "{{classpath}}"
MAIN_OPTS_PLACEHOLDER = "{{main-opts}}"
MAIN_CLASS = "clojure.main"


class Action(str, Enum):
    """Terminal actions, declared in precedence order."""

    GENERATE_MANIFEST = "pom"
    PRINT_CLASSPATH = "print-classpath"
    DESCRIBE = "describe"
    PRINT_TREE = "tree"
    TRACE = "trace"
    COMMAND = "command"
    RUN = "run"


def select_action(invocation: Invocation) -> Action:
    """Return the first action whose flag is set on *invocation*."""
    if invocation.pom:
        return Action.GENERATE_MANIFEST
    if invocation.print_classpath:
        return Action.PRINT_CLASSPATH
    if invocation.describe:
        return Action.DESCRIBE
    if invocation.tree:
        return Action.PRINT_TREE
    if invocation.trace:
        return Action.TRACE
    if invocation.command is not None:
        return Action.COMMAND
    return Action.RUN


def build_tools_args(invocation: Invocation) -> list[str]:
    """Return the alias and mode arguments forwarded to the resolver scripts."""
    tools_args: list[str] = []
    if invocation.deps_data and invocation.deps_data.strip():
        tools_args += ["--config-data", invocation.deps_data]
    for prefix, aliases in (
        ("-R", invocation.resolve_aliases),
        ("-C", invocation.classpath_aliases),
        ("-J", invocation.jvm_aliases),
        ("-M", invocation.main_aliases),
        ("-A", invocation.all_aliases),
    ):
        if aliases:
            tools_args.append(prefix + aliases)
    if invocation.force_cp:
        tools_args.append("--skip-cp")
    if invocation.trace:
        tools_args.append("--trace")
    return tools_args


def _forced_classpath(invocation: Invocation) -> str | None:
    if invocation.force_cp and invocation.force_cp.strip():
        return invocation.force_cp
    return None


def _read_optional(path: Path) -> str | None:
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def _split_opts(opts: str | None) -> list[str]:
    return opts.split() if opts else []


def build_run_argv(
    context: LaunchContext,
    invocation: Invocation,
    entry: CacheEntry,
    classpath: str,
) -> list[str]:
    """Assemble the java command line for the default run action."""
    jvm_cache_opts = _read_optional(entry.jvm_file)
    main_cache_opts = _read_optional(entry.main_file)
    return [
        context.java_cmd,
        *_split_opts(jvm_cache_opts),
        *invocation.jvm_opts,
        f"-Dclojure.libfile={entry.libs_file}",
        "-classpath",
        classpath,
        MAIN_CLASS,
        *_split_opts(main_cache_opts),
        *invocation.args,
    ]


def build_custom_command(template: str, classpath: str, main_opts: str | None) -> list[str]:
    """Fill the ``-Scommand`` placeholders and split the result on whitespace."""
    command = template.replace(CLASSPATH_PLACEHOLDER, classpath)
    command = command.replace(MAIN_OPTS_PLACEHOLDER, main_opts or "")
    return command.split()


class DispatchEngine:
    """Runs one parsed invocation against an injected environment.

    Parameters
    ----------
    context:
        Directories and tools discovered at startup.
    resolver:
        Any object satisfying :class:`ClasspathResolver`.
    runner:
        Any object satisfying :class:`ProcessRunner`.
    emit:
        Writes one line of program output (stdout in the CLI).
    """

    def __init__(
        self,
        context: LaunchContext,
        resolver: ClasspathResolver,
        runner: ProcessRunner,
        emit: Callable[[str], None],
    ) -> None:
        self._context = context
        self._resolver = resolver
        self._runner = runner
        self._emit = emit

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(self, invocation: Invocation) -> None:
        """Perform the action selected by *invocation*.

        Raises
        ------
        MissingDepsFileError
            ``-Sresolve-tags`` without a project deps file.
        ProcessFailedError
            When the resolver or the launched program fails.
        """
        context = self._context
        project_file = project_deps_file(context.cwd, invocation.deps_file)

        if invocation.resolve_tags:
            self._resolve_tags(invocation, project_file)
            return

        seed_user_config(context.config_dir, context.install_dir)
        chain = resolve_config_chain(
            context.install_dir,
            context.config_dir,
            project_file,
            repro=invocation.repro,
        )
        key = compute_cache_key(invocation, chain.paths)
        entry = CacheEntry.for_key(context.cache_dir, key)
        logger.debug("Cache key %s for config paths %s", key, [str(p) for p in chain.paths])

        if invocation.verbose:
            self._emit(verbose_report(context, chain, entry))

        action = select_action(invocation)
        if self._needs_cache(action, invocation) and is_stale(
            invocation, chain.paths, entry.cp_file
        ):
            if invocation.verbose:
                self._emit("Refreshing classpath")
            self._resolver.make_classpath(chain, entry, build_tools_args(invocation))

        logger.debug("Dispatching %s", action.value)
        handlers: dict[Action, Callable[[Invocation, ConfigChain, CacheEntry], None]] = {
            Action.GENERATE_MANIFEST: self._generate_manifest,
            Action.PRINT_CLASSPATH: self._print_classpath,
            Action.DESCRIBE: self._describe,
            Action.PRINT_TREE: self._print_tree,
            Action.TRACE: self._trace,
            Action.COMMAND: self._run_command,
            Action.RUN: self._run,
        }
        handlers[action](invocation, chain, entry)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _needs_cache(action: Action, invocation: Invocation) -> bool:
        if action is Action.DESCRIBE:
            return False
        if action is Action.PRINT_CLASSPATH and _forced_classpath(invocation):
            return False
        return True

    @staticmethod
    def _classpath(invocation: Invocation, entry: CacheEntry) -> str:
        forced = _forced_classpath(invocation)
        if forced is not None:
            return forced
        return entry.cp_file.read_text(encoding="utf-8").strip()

    def _resolve_tags(self, invocation: Invocation, project_file: Path) -> None:
        if not project_file.exists():
            raise MissingDepsFileError(
                f"{invocation.deps_file or project_file.name} does not exist",
            )
        self._resolver.resolve_tags(project_file)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _generate_manifest(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        self._resolver.generate_manifest(chain, build_tools_args(invocation))

    def _print_classpath(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        self._emit(self._classpath(invocation, entry))

    def _describe(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        self._emit(render_edn_map(describe_record(invocation, self._context, chain)))

    def _print_tree(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        self._emit(self._resolver.print_tree(entry).strip())

    def _trace(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        self._emit("Writing trace.edn")

    def _run_command(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        command = build_custom_command(
            invocation.command or "",
            self._classpath(invocation, entry),
            _read_optional(entry.main_file),
        )
        if not command:
            raise InvalidOptionError("-Scommand template is empty")
        self._runner.run(command)

    def _run(
        self, invocation: Invocation, chain: ConfigChain, entry: CacheEntry,
    ) -> None:
        argv = build_run_argv(
            self._context,
            invocation,
            entry,
            self._classpath(invocation, entry),
        )
        self._runner.run(argv)
