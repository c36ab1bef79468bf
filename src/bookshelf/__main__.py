"""Main entry point for the bookshelf package."""

from bookshelf.cli import main

if __name__ == "__main__":
    main()
