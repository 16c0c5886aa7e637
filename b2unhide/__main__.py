"""Allow running as `python -m b2unhide`."""

import sys

from b2unhide.main import main

sys.exit(main())
