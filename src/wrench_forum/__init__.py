"""Wrench Forum: a community forum for automotive mechanics."""

__version__ = "0.1.0"
