"""Iconografix: browse, search and pick icons from several icon sets and hand
the chosen one to an embedding host."""

__version__ = "1.0.0"
