"""Allow running as python -m weathr."""

import sys

from .tui.dashboard import main

sys.exit(main())
