"""Column types used by the board models."""
import json

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class JSONEncodedList(TypeDecorator):
    """Stores a list of strings as JSON text; always reads back a list."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return json.dumps(list(value or []))

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            return []
        return decoded if isinstance(decoded, list) else []
