"""Run the bfset command line interface."""

from __future__ import annotations

from bfset.cli.main import main

if __name__ == "__main__":
    main()
