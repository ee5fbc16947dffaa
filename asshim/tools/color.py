# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

# pyright: reportConstantRedefinition=false
import os

if os.getenv("NO_COLOR"):
    RESET = ""
    DIM = ""

    RED = ""
    GREEN = ""
    YELLOW = ""
    BLUE = ""
    CYAN = ""
    WHITE = ""

    BG_RED = ""

else:
    RESET = "\x1b[0m"
    DIM = "\x1b[2m"

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"

    BG_RED = "\x1b[41m"
