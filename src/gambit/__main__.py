"""Allow ``python -m gambit``."""

from gambit.console import main

if __name__ == "__main__":
    raise SystemExit(main())
