"""
Package entry point.

Allows running the application via:

    python -m maischedule

This simply forwards execution to maischedule.cli.main().
"""

from maischedule.cli import main

if __name__ == "__main__":
    main()
