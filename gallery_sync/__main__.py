"""Allow running the sync with ``python -m gallery_sync``."""

import sys

from gallery_sync.cli import main

if __name__ == "__main__":
    sys.exit(main())
