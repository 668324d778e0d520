"""Allow ``python -m dependable``."""

import sys

from dependable.main import main

if __name__ == "__main__":
    sys.exit(main())
