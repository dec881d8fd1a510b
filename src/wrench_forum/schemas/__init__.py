"""Pydantic schemas for Wrench Forum API."""
