"""Allow ``python -m ragdocs.cli`` execution."""

import sys

from ragdocs.cli.commands import main

sys.exit(main())
