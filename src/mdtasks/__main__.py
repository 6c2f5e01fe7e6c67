"""Entry point for ``python -m mdtasks``."""

from mdtasks.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
