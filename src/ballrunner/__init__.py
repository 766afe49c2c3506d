"""BALLRUNNER - single-lane endless runner."""

__version__ = "0.1.0"
