"""Entry point for running as a module: python -m todo_list"""

import sys

from todo_list.cli import main

if __name__ == "__main__":
    sys.exit(main())
