"""Campus API application package."""
