import sys

from chesslens.cli import main

sys.exit(main())
