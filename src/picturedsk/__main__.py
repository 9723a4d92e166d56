"""Allow running as ``python -m picturedsk``."""

import sys

from picturedsk.main import main

sys.exit(main())
