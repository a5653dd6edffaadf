"""Bookshare - a small book-sharing API."""

__version__ = "0.1.0"
