"""Database utilities for Wrench Forum."""
