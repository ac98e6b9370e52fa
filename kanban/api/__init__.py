"""HTTP API for the board."""
