"""Allow running revbench as ``python -m revbench``."""

import sys

from revbench.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
