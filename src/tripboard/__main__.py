"""Allow ``python -m tripboard``."""

from tripboard.app import main

if __name__ == "__main__":
    raise SystemExit(main())
