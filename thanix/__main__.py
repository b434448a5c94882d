"""Entry point: python -m thanix"""

import sys

from thanix.cli import main

sys.exit(main())
