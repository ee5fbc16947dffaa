# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import sys

from . import color


class ColoredFormatter(logging.Formatter):
    """ColoredFormatter is an opinionated log formatter with human-readable output colored
    with `ANSI escape sequences <https://en.wikipedia.org/wiki/ANSI_escape_code>`_.

    If ``program`` is given, every line is prefixed by it (like ``err(3)`` does),
    so that diagnostics can be told apart from the output of the wrapped tool.
    """

    default_time_format = "%H:%M:%S"
    default_msec_format = "%s.%03d"

    program: str | None

    def __init__(self, program: str | None = None) -> None:
        super().__init__()
        self.program = program

    @staticmethod
    def get_msg_color(level: int) -> str:
        if level >= logging.CRITICAL:
            return color.WHITE + color.BG_RED
        elif level >= logging.ERROR:
            return color.RED
        elif level >= logging.WARNING:
            return color.YELLOW
        elif level >= logging.INFO:
            return color.RESET
        else:
            return color.DIM

    def usesTime(self) -> bool:
        return True

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        record.asctime = self.formatTime(record)
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
            exception_suffix = f"\n{record.exc_text}"
        else:
            exception_suffix = ""

        program_prefix = f"{color.GREEN}{self.program}{color.RESET}: " if self.program else ""
        msg_color = self.get_msg_color(record.levelno)
        return (
            f"{program_prefix}"
            f"{color.BLUE}[{color.CYAN}{record.levelname}{color.BLUE} {record.asctime}] "
            f"{color.GREEN}{record.name}{color.RESET}: {msg_color}{record.message}{color.RESET}"
            f"{exception_suffix}"
        )


def initialize(verbose: bool, program: str | None = None) -> None:
    """Resets logging handlers to ensure only a single, logging.StreamHandler using
    :py:class:`~asshim.tools.logs.ColoredFormatter` outputs onto the terminal (via stderr).
    Any other registered logging.Handlers printing to stdout or stderr are removed.

    Without ``verbose``, only warnings and errors are shown - a shim must not add noise
    to the output of the tool it wraps.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Remove any loggers that dump onto stdout/stderr
    handlers_to_remove: list[logging.Handler] = [
        handler
        for handler in root_logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and (handler.stream is sys.stdout or handler.stream is sys.stderr)  # type: ignore
    ]

    for handler in handlers_to_remove:
        root_logger.removeHandler(handler)

    # Add our own handler for stderr
    new_handler = logging.StreamHandler(sys.stderr)
    new_handler.setFormatter(ColoredFormatter(program))
    root_logger.addHandler(new_handler)
