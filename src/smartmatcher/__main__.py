"""Main entry point for the smartmatcher package.

This module allows the package to be run as a script using `python -m smartmatcher`.
"""

import sys


def main() -> int:
    """Run the command line interface."""
    from smartmatcher.main import main as app_main
    return app_main()


if __name__ == "__main__":
    sys.exit(main())
