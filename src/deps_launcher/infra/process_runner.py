""":mod:`subprocess` backed implementation of :class:`~deps_launcher.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that spawns child
processes.  ``OSError`` from spawning is caught here and re-raised as
:class:`~deps_launcher.exceptions.EnvironmentDiscoveryError`; a non-zero
exit becomes :class:`~deps_launcher.exceptions.ProcessFailedError`.

Rules
-----
* Fully synchronous — every call blocks until the child exits.
* stderr is always inherited; the child reports its own failures.
* Ctrl+C belongs to the child while it runs; the launcher waits for its
  exit code instead of killing it.
* No timeout and no retry.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from types import FrameType

from deps_launcher.core.protocols import ProcessOptions
from deps_launcher.exceptions import EnvironmentDiscoveryError, ProcessFailedError

logger = logging.getLogger(__name__)


def _ignore_interrupt(signum: int, frame: FrameType | None) -> None:
    pass


@contextmanager
def _interrupt_deferred_to_child() -> Iterator[None]:
    """Swallow SIGINT in the launcher for the duration of the block.

    A Python-level handler is installed rather than ``SIG_IGN``: handlers
    are reset on exec while an ignored disposition would be inherited by
    the child.  Signal handlers can only be set from the main thread.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, _ignore_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _exit_status(returncode: int) -> int:
    """Map a death by signal (negative code) to the shell's ``128 + n``."""
    return 128 - returncode if returncode < 0 else returncode


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` backed by :func:`subprocess.run`.

    This class satisfies the :class:`~deps_launcher.core.protocols.ProcessRunner`
    protocol structurally — no explicit inheritance required.
    """

    def run(
        self,
        args: Sequence[str],
        options: ProcessOptions | None = None,
    ) -> str | None:
        """Run *args* and wait for it.

        With ``input_text`` the text is written to the child's stdin and
        the pipe closed before waiting, so large payloads cannot deadlock.

        Raises
        ------
        ProcessFailedError
            When the child exits with a non-zero code.
        EnvironmentDiscoveryError
            When the executable cannot be started.
        """
        opts = options or ProcessOptions()
        argv = [str(arg) for arg in args]
        logger.debug("Running %s", " ".join(argv))

        try:
            with _interrupt_deferred_to_child():
                completed = subprocess.run(
                    argv,
                    input=opts.input_text,
                    stdout=subprocess.PIPE if opts.capture_stdout else None,
                    text=True,
                    check=False,
                )
        except OSError as exc:
            raise EnvironmentDiscoveryError(
                f"Could not start {argv[0] if argv else 'process'}: {exc}",
            ) from exc

        if completed.returncode != 0:
            status = _exit_status(completed.returncode)
            logger.debug("%s exited with %d", argv[0], status)
            raise ProcessFailedError(argv, status)

        return completed.stdout if opts.capture_stdout else None
