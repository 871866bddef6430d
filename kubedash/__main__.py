"""Allow ``python -m kubedash``."""

import sys

from kubedash.cli import main

if __name__ == "__main__":
    sys.exit(main())
