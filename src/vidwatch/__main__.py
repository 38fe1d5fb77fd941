"""Allow running vidwatch as ``python -m vidwatch``."""

from vidwatch.cli import main

if __name__ == "__main__":
    main()
