"""CLI application entry point for deps-launcher.

This module is the **sole error boundary** for the entire application.
It catches :class:`~deps_launcher.exceptions.DepsLauncherError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — parsing, cache handling and dispatch
  are delegated to the core layer, process work to the infra layer.
* Program output (classpath, describe record, tree) is written to
  stdout; diagnostics go to stderr.
* A failing child process propagates its own exit code unchanged.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from deps_launcher.cli import exit_codes
from deps_launcher.cli.console import configure_logging, console, escape_markup
from deps_launcher.core.arguments import parse_args
from deps_launcher.core.dispatch import DispatchEngine
from deps_launcher.exceptions import DepsLauncherError, ProcessFailedError
from deps_launcher.infra.environment import build_context
from deps_launcher.infra.process_runner import SubprocessRunner
from deps_launcher.infra.tools_resolver import ToolsDepsResolver

HELP_TEXT = """\
Usage: deps-launcher [dep-opt*] [init-opt*] [main-opt] [arg*]

Constructs and invokes a command line of the form:

java [java-opt*] -cp classpath clojure.main [init-opt*] [main-opt] [arg*]

The dep-opts are used to build the java-opts and classpath:
 -Jopt          Pass opt through in java_opts, ex: -J-Xmx512m
 -Oalias...     Concatenated jvm option aliases, ex: -O:mem
 -Ralias...     Concatenated resolve-deps aliases, ex: -R:bench:1.9
 -Calias...     Concatenated make-classpath aliases, ex: -C:dev
 -Malias...     Concatenated main option aliases, ex: -M:test
 -Aalias...     Concatenated aliases of any kind, ex: -A:dev:mem
 -Sdeps EDN     Deps data to use as the last deps file to be merged
 -Spath         Compute classpath and echo to stdout only
 -Scp CP        Do NOT compute or cache classpath, use this one instead
 -Srepro        Ignore the ~/.clojure/deps.edn config file
 -Sforce        Force recomputation of the classpath (don't use the cache)
 -Spom          Generate (or update existing) pom.xml with deps and paths
 -Stree         Print dependency tree
 -Sresolve-tags Resolve git coordinate tags to shas and update deps.edn
 -Sverbose      Print important path info to console
 -Sdescribe     Print environment and command parsing info as data
 -Strace        Write a trace.edn file that traces deps expansion
 -Sdeps-file    Use this file instead of deps.edn
 -Scommand      A custom command that will be invoked.
                Substitutions: {{classpath}}, {{main-opts}}.

init-opt:
 -i, --init path     Load a file or resource
 -e, --eval string   Eval exprs in string; print non-nil values
 --report target     Report uncaught exception to "file" (default), "stderr", or "none"

main-opt:
 -m, --main ns-name  Call the -main function from namespace w/args
 -r, --repl          Run a repl
 path                Run a script from a file or resource
 -                   Run a script from standard input
 -h, -?, --help      Print this help message and exit

For more info, see:
 https://clojure.org/guides/deps_and_cli
 https://clojure.org/reference/repl_and_main"""


def _emit(line: str) -> None:
    print(line, flush=True)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the deps-launcher CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    invocation = parse_args(sys.argv[1:] if argv is None else argv)

    if invocation.help:
        _emit(HELP_TEXT)
        return exit_codes.SUCCESS

    configure_logging(invocation.verbose)

    context = build_context(os.environ, Path.cwd())
    runner = SubprocessRunner()
    resolver = ToolsDepsResolver(runner, context.java_cmd, context.tools_cp)
    DispatchEngine(context, resolver, runner, _emit).execute(invocation)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ProcessFailedError as exc:
        sys.exit(exc.returncode)
    except DepsLauncherError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
