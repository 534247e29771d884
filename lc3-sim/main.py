"""Application entry-point for the LC-3 simulator.
Run `python main.py IMAGE...` from the project root (add `--gui` for the Qt window)."""
import sys

from lc3.cli import main

if __name__ == "__main__":
    sys.exit(main())
