import sys

from rlcs.cli import main

sys.exit(main())
