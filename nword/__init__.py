"""Build n-gram frequency tables and query them for word continuations."""

__version__ = "0.1.0"