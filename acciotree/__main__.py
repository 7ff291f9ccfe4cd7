"""Allow running AccioTree as ``python -m acciotree``."""

import sys

from .cli import main

sys.exit(main())
