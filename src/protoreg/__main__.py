import sys

from protoreg.cli import main

sys.exit(main())
