from __future__ import annotations

"""
Module execution entry point ('python -m deptree4ai').
"""

import sys

from deptree4ai.main import main

if __name__ == "__main__":
    sys.exit(main())
