"""Allow ``python -m ats_cv``."""

import sys

from .cli import main

sys.exit(main())
