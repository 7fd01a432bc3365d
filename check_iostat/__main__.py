"""Allow ``python -m check_iostat``."""

import sys

from check_iostat.cli import main

sys.exit(main())
