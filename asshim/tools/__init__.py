# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from . import color, logs, types

__all__ = ["color", "logs", "types"]
