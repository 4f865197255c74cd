"""Command-line parsing into an :class:`~deps_launcher.core.models.Invocation`.

Tokens are consumed left to right.  Prefix flags (``-M:test``) append
their suffix, ``-S`` flags set booleans or take the next token as a
value, and the first other token starts the positional arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from deps_launcher.core.models import Invocation
from deps_launcher.exceptions import InvalidOptionError

# Two-character prefixes whose suffix is appended to a field.
PREFIX_FLAGS: dict[str, str] = {
    "-J": "jvm_opts",
    "-R": "resolve_aliases",
    "-C": "classpath_aliases",
    "-O": "jvm_aliases",
    "-M": "main_aliases",
    "-A": "all_aliases",
}

BOOL_FLAGS: dict[str, str] = {
    "-Spath": "print_classpath",
    "-Sverbose": "verbose",
    "-Strace": "trace",
    "-Sdescribe": "describe",
    "-Sforce": "force",
    "-Srepro": "repro",
    "-Stree": "tree",
    "-Spom": "pom",
    "-Sresolve-tags": "resolve_tags",
}

VALUE_FLAGS: dict[str, str] = {
    "-Sdeps": "deps_data",
    "-Scp": "force_cp",
    "-Sdeps-file": "deps_file",
    "-Scommand": "command",
}

OPTION_PREFIX = "-S"
HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})


def _append(invocation: Invocation, field: str, suffix: str) -> Invocation:
    current = getattr(invocation, field)
    if isinstance(current, tuple):
        if not suffix:
            return invocation
        return replace(invocation, **{field: (*current, suffix)})
    return replace(invocation, **{field: current + suffix})


def parse_args(argv: Sequence[str]) -> Invocation:
    """Fold *argv* into an :class:`Invocation`.

    Raises
    ------
    InvalidOptionError
        For an unknown ``-S`` option or a value flag with no value.
    """
    invocation = Invocation()
    index = 0
    while index < len(argv):
        arg = argv[index]
        prefix = arg[:2]

        if prefix in PREFIX_FLAGS:
            invocation = _append(invocation, PREFIX_FLAGS[prefix], arg[2:])
            index += 1
        elif arg in BOOL_FLAGS:
            invocation = replace(invocation, **{BOOL_FLAGS[arg]: True})
            index += 1
        elif arg in VALUE_FLAGS:
            if index + 1 >= len(argv):
                raise InvalidOptionError(
                    f"Missing value for option: {arg}",
                    hint="Run with --help to see the option list.",
                )
            invocation = replace(invocation, **{VALUE_FLAGS[arg]: argv[index + 1]})
            index += 2
        elif arg.startswith(OPTION_PREFIX):
            raise InvalidOptionError(f"Invalid option: {arg}")
        elif arg in HELP_FLAGS and not (invocation.main_aliases or invocation.all_aliases):
            return replace(invocation, help=True)
        else:
            return replace(invocation, args=tuple(argv[index:]))

    return invocation
