"""License compliance configuration resolution."""

__version__ = "0.1.0"
