# © Copyright 2026 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from .cli import main

if __name__ == "__main__":
    main()
