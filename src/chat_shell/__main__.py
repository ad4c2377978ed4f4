"""Entry point: python -m chat_shell"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
