"""Allow ``python -m steamcalc``."""

import sys

from .cli import main

sys.exit(main())
