"""ZonePulse - command-line entry point."""

import sys

from zonepulse.cli import main


if __name__ == "__main__":
    sys.exit(main())
