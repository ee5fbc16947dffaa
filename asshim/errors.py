# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later


class ShimError(Exception):
    """ShimError is the base for all fatal, shim-internal failures.

    ShimErrors are never caused by the wrapped tool itself - the tool's own
    failures are reported through its exit code. A ShimError means the shim
    was unable to run the tool (or to learn how it terminated) at all.
    """

    operation: str
    cause: BaseException | None

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {describe(cause)}")


class ArgumentVectorError(ShimError):
    """ArgumentVectorError is raised when the translated argument vector
    could not be allocated."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("allocating argument vector", cause)


class SpawnError(ShimError):
    """SpawnError is raised when the child process could not be forked.
    No child exists when this is raised."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("fork", cause)


class WaitError(ShimError):
    """WaitError is raised when waiting for the child process failed.
    This is a property of the wait call, not of the child's outcome."""

    pid: int

    def __init__(self, pid: int, cause: BaseException | None = None) -> None:
        self.pid = pid
        super().__init__(f"waitpid({pid})", cause)


def describe(cause: BaseException | None) -> str:
    """describe returns a short, human-readable description of the underlying
    system error.

    >>> import errno
    >>> describe(OSError(errno.EAGAIN, "Resource temporarily unavailable"))
    'Resource temporarily unavailable'
    >>> describe(MemoryError())
    'MemoryError'
    >>> describe(None)
    'unknown error'
    """
    if cause is None:
        return "unknown error"
    elif isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    elif cause.args:
        return str(cause)
    return type(cause).__name__
