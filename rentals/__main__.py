import sys

from rentals.cli import main

sys.exit(main())
