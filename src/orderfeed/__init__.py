"""Keyset-paginated listing engine for ask (listing) orders."""

__version__ = "0.3.0"
