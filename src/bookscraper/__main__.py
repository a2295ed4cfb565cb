"""Allow running as ``python -m bookscraper``."""

from bookscraper.cli import main

if __name__ == "__main__":
    main()
