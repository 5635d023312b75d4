"""In-memory task tracking and sales-productivity analytics."""

__version__ = "0.1.0"
