"""Resolve ``require`` lines between text files and merge them in link order."""

__version__ = "0.1.0"
