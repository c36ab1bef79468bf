"""Bookshelf: search a catalog and keep a library and wishlist."""

__version__ = "0.1.0"
