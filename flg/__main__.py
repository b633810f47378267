"""Allow ``python -m flg``."""

import sys

from flg.cli import main

sys.exit(main())
