# SPDX-License-Identifier: MIT
"""Allow running archbuild as 'python -m archbuild'."""

import sys

from archbuild.cli import main

sys.exit(main())
