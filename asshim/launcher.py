# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
import signal
from typing import Mapping, Sequence

from .errors import SpawnError, WaitError

EXEC_FAILED_EXIT_CODE = 127
"""Exit code used by the child when the target program could not be executed."""

ABNORMAL_EXIT_CODE = 1
"""Exit code reported when the child was terminated without exiting (e.g. by a signal)."""

logger = logging.getLogger(__name__)

# Python ignores those on startup, and ignored dispositions survive execve
RESTORED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGPIPE", "SIGXFSZ") if hasattr(signal, name)
)


def launch(argv: Sequence[str], env: Mapping[str, str] | None = None) -> int:
    """launch runs ``argv[0]`` with the provided argument vector as a single child process,
    blocks until it terminates and returns the exit code the shim should exit with.

    ``argv[0]`` must be a path - PATH is not searched. The environment defaults to
    the current one, forwarded unchanged.

    The child starts with the default disposition of :py:data:`RESTORED_SIGNALS`,
    as it would when started directly from a shell.

    If the program can't be executed, the child exits with :py:data:`EXEC_FAILED_EXIT_CODE`,
    which is propagated like any other exit code. Failures of fork and waitpid
    themselves are raised as :py:exc:`~asshim.errors.SpawnError`
    and :py:exc:`~asshim.errors.WaitError`.
    """
    if env is None:
        env = os.environ

    try:
        pid = os.fork()
    except OSError as e:
        raise SpawnError(e) from e

    if pid == 0:
        # Child - never return into the caller, regardless of what happens
        try:
            for signum in RESTORED_SIGNALS:
                signal.signal(signum, signal.SIG_DFL)
            os.execve(argv[0], argv, env)
        finally:
            os._exit(EXEC_FAILED_EXIT_CODE)

    logger.debug("Spawned %s as pid %d", argv[0], pid)

    try:
        _, status = os.waitpid(pid, 0)
    except OSError as e:
        raise WaitError(pid, e) from e
    except KeyboardInterrupt:
        # The child is in the same process group and got the same SIGINT
        logger.debug("Interrupted, reaping child %d", pid)
        os.waitpid(pid, 0)
        raise

    code = exit_code_from_status(status)
    logger.debug("Child %d terminated with status %#x, exit code %d", pid, status, code)
    return code


def exit_code_from_status(status: int) -> int:
    """exit_code_from_status maps a wait status (as returned by ``os.waitpid``)
    to an exit code: the child's own code if it exited normally,
    :py:data:`ABNORMAL_EXIT_CODE` otherwise.

    >>> exit_code_from_status(0)
    0
    >>> exit_code_from_status(3 << 8)
    3
    >>> exit_code_from_status(9)  # killed by SIGKILL
    1
    """
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    return ABNORMAL_EXIT_CODE
