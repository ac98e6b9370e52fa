"""Server-side board services."""
