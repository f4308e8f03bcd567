"""Module entrypoint for ``python -m festmap``."""

from festmap.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
