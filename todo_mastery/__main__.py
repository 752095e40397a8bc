"""Entry point for todo-mastery when run as a module.

This allows the package to be run with: python -m todo_mastery
"""

import sys

from todo_mastery.cli import main

if __name__ == "__main__":
    sys.exit(main())
