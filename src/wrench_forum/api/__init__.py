"""HTTP API for Wrench Forum."""
