import sys

from sortlab.cli import main

sys.exit(main())
