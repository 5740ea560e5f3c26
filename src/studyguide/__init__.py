"""Turn course documents into exhaustive study guides."""

__version__ = "0.1.0"
