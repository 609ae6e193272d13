"""Allow ``python -m netstar``."""

from netstar.cli import main

if __name__ == "__main__":
    main()
