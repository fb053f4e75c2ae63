"""Allow ``python -m gitmermaid``."""

import sys

from gitmermaid.cli import main

if __name__ == "__main__":
	sys.exit(main())
