"""Educational sorting demo: step counts and timings for five classic sorts."""

__version__ = "0.1.0"
