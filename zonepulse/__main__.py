import sys

from zonepulse.cli import main

sys.exit(main())
