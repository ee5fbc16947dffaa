# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
import shlex
import signal
import sys
from os.path import basename
from typing import Mapping, NoReturn, Sequence, final

from .errors import ArgumentVectorError, ShimError
from .launcher import launch
from .options import ShimOptions
from .tools.logs import initialize as initialize_logging
from .translate import Invocation, Translator

FATAL_EXIT_CODE = 1
"""Exit code used when the shim itself fails (see :py:exc:`~asshim.errors.ShimError`)."""


class Shim:
    """Shim glues a :py:class:`~asshim.translate.Translator` to the process launcher::

        if __name__ == "__main__":
            Shim(ClangTranslator()).main()

    A Shim runs exactly one child process per :py:meth:`run`, and never
    retries or times out.
    """

    translator: Translator
    options: ShimOptions
    env: Mapping[str, str] | None
    logger: logging.Logger

    def __init__(
        self,
        translator: Translator,
        options: ShimOptions = ShimOptions(),
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.translator = translator
        self.options = options
        self.env = env
        self.logger = logging.getLogger(f"Shim.{translator.name}")

    @final
    def translate(self, argv: Sequence[str]) -> list[str]:
        """translate converts the shim's own argument vector (as in ``sys.argv``)
        into the argument vector of the wrapped tool.
        """
        invocation = Invocation.from_argv(argv)
        try:
            return self.translator.translate(invocation)
        except MemoryError as e:
            raise ArgumentVectorError(e) from e

    @final
    def run(self, argv: Sequence[str]) -> int:
        """run translates the provided argument vector, runs the wrapped tool
        and returns its exit code.

        :py:exc:`~asshim.errors.ShimError` is raised if the tool couldn't be run at all.
        """
        translated = self.translate(argv)
        self.logger.debug("Running: %s", shlex.join(translated))

        if self.options.dry_run:
            print(shlex.join(translated))
            return 0

        return launch(translated, self.env)

    @final
    def main(self, argv: Sequence[str] | None = None) -> NoReturn:
        """main is the entry point of a shim executable: it sets up logging,
        calls :py:meth:`run` with the provided arguments (or ``sys.argv``),
        and exits the process with the resulting exit code.

        An interrupt (Ctrl-C) while the tool runs terminates the shim by SIGINT.
        """
        if argv is None:
            argv = sys.argv

        initialize_logging(self.options.verbose, basename(argv[0]) if argv else None)

        try:
            code = self.run(argv)
        except ShimError as e:
            self.logger.critical("%s", e)
            sys.exit(FATAL_EXIT_CODE)
        except KeyboardInterrupt:
            die_from_sigint()

        sys.exit(code)


def die_from_sigint() -> NoReturn:
    """Terminates the process by SIGINT, without a traceback, so that the parent
    (usually a shell or make) sees the interruption as such."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    os.kill(os.getpid(), signal.SIGINT)
    sys.exit(128 + signal.SIGINT)
