# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass


@dataclass(frozen=True)
class ShimOptions:
    """ShimOptions control the behavior of :py:class:`~asshim.Shim`."""

    verbose: bool = False
    """verbose, when set to ``True``, shows DEBUG logging messages - most importantly
    the translated command line and how the child process terminated.

    Default value is ``False``, and the shim stays silent unless something fatal happens.
    """

    dry_run: bool = False
    """dry_run, when set to ``True``, causes the translated command to be printed
    onto stdout instead of being executed. The shim then always exits with 0.

    Default value is ``False``.
    """
