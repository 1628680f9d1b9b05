"""
Culture Kernel entry point.

Usage:
    python -m culture_kernel serve --port 8080
    python -m culture_kernel list
    python -m culture_kernel seed
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
