"""Launch the interactive puzzle window."""

from __future__ import annotations

import sys

from polar_pairs.ui.main import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
