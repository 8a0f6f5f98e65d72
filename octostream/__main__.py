"""Entry point for running as a module: python -m octostream."""

import sys

from octostream.cli import main

if __name__ == "__main__":
    sys.exit(main())
