# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from . import errors, launcher, policy, tools, translate
from .app import Shim
from .options import ShimOptions
from .policy import Policy, detect_policy
from .tools.logs import initialize as initialize_logging
from .translate import (
    CCTranslator,
    ClangTranslator,
    Invocation,
    PassthroughTranslator,
    Translator,
    translator_for,
)

__all__ = [
    "errors",
    "launcher",
    "policy",
    "tools",
    "translate",
    "CCTranslator",
    "ClangTranslator",
    "Invocation",
    "PassthroughTranslator",
    "Policy",
    "Shim",
    "ShimOptions",
    "Translator",
    "detect_policy",
    "initialize_logging",
    "translator_for",
]

__name__ = "asshim"
__version__ = "0.1.0"
