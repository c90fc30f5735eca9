"""Allow ``python -m piechart``."""

from .cli import main

if __name__ == "__main__":
    main()
