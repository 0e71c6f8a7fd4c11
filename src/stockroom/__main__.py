"""Entry point for 'python -m stockroom' command.

This module allows the Stockroom CLI to be invoked using
'python -m stockroom'.
"""

from stockroom.cli import main

if __name__ == "__main__":
    main()
