# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import sys
from enum import Enum


class Policy(Enum):
    """Policy selects how a GNU-style ``as`` invocation is translated."""

    PASSTHROUGH = "passthrough"
    """Forward everything to the native assembler, adding a single compatibility flag."""

    CLANG = "clang"
    """Rewrite into ``clang -c -x assembler``."""

    CC = "cc"
    """Rewrite into ``cc -c -x assembler``."""

    @classmethod
    def parse(cls, s: str) -> "Policy":
        """Parses a policy name, ignoring case.

        >>> Policy.parse("Clang")
        <Policy.CLANG: 'clang'>
        >>> Policy.parse("gas")
        Traceback (most recent call last):
        ...
        ValueError: invalid policy: 'gas' (expected one of: passthrough, clang, cc)
        """
        try:
            return cls(s.lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"invalid policy: {s!r} (expected one of: {valid})") from None


def detect_policy(platform: str = sys.platform) -> Policy:
    """detect_policy picks the policy for the given platform: Apple hosts
    ship a native ``as``, everything else is assumed to only ship clang.

    >>> detect_policy("darwin")
    <Policy.PASSTHROUGH: 'passthrough'>
    >>> detect_policy("freebsd14")
    <Policy.CLANG: 'clang'>
    """
    if platform == "darwin":
        return Policy.PASSTHROUGH
    return Policy.CLANG
