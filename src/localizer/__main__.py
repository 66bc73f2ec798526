"""Allow ``python -m localizer``."""

import sys

from localizer.cli import main

sys.exit(main())
