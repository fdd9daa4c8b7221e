"""Run the tile generator with `python -m tilecollapse`."""

import sys

from tilecollapse import main

sys.exit(main())
