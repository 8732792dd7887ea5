"""Main entry point for the Valora package when run as a module.

This module enables running the Valora CLI using 'python -m valora'.
"""

import asyncio
import sys

from . import cli


def main():
    """Main entry point for the package."""
    sys.exit(asyncio.run(cli.main()))


if __name__ == "__main__":
    main()
