# dirsnapshot/__main__.py

"""Allow ``python -m dirsnapshot``."""

import sys

from dirsnapshot.cli import main

sys.exit(main())
