"""SLTP - trading journal with R-based progress tracking."""

__version__ = "0.1.0"
