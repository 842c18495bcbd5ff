import sys

from pyclimstat.cli import main

sys.exit(main())
