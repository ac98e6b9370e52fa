"""Shared field coercion for request schemas."""


def is_integer_index(value) -> bool:
    """True for JSON integers; booleans, strings and fractions fall back to default placement."""
    return isinstance(value, int) and not isinstance(value, bool)
