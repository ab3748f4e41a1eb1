import sys

from whofunds.cli import main

sys.exit(main())
