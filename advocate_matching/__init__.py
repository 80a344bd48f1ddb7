"""Advocate Matcher: recommend customer advocates for sales opportunities."""

__version__ = "1.0.0"
