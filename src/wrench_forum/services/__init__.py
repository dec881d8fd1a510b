"""Domain services for Wrench Forum."""
