"""Allow running pysync with ``python -m pysync``."""

from .cli import main

if __name__ == "__main__":
    main()
