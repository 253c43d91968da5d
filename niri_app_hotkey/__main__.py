"""Run with `python -m niri_app_hotkey`."""

import sys

from .command import main

sys.exit(main())
