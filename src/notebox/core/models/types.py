"""Custom SQLAlchemy types for Notebox models with cross-DB support."""

import json
import uuid
from typing import List, Optional

from sqlalchemy import String, Text, TypeDecorator


class TagListType(TypeDecorator):
    """
    Store an ordered list of tag strings:

    - On PostgreSQL: uses ARRAY(String(50))
    - On SQLite (and others): stores JSON text in a TEXT column

    Always returns List[str], never None.
    """

    cache_ok = True
    impl = Text  # placeholder, real impl decided per-dialect

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import ARRAY

            return dialect.type_descriptor(ARRAY(String(50)))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[List[str]], dialect):
        values = [str(v) for v in (value or [])]
        if dialect.name == "postgresql":
            return values
        return json.dumps(values)

    def process_result_value(self, value, dialect) -> List[str]:
        if value is None:
            return []
        if dialect.name == "postgresql":
            return [str(v) for v in value]
        return [str(v) for v in json.loads(value)]


class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.

    - Uses PostgreSQL UUID type when available
    - Falls back to CHAR(36) storing hex string form on other DBs (e.g., SQLite)
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
