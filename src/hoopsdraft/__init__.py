"""Fantasy basketball draft analytics."""

__version__ = "0.1.0"
