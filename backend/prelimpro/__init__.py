"""Prelimpro - preliminary notice generation and tracking backend."""
__version__ = "1.0.0"
