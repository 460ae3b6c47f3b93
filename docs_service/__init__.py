"""Directory-tree document service: nested directories, documents and their edit history."""

__version__ = "1.0.0"
