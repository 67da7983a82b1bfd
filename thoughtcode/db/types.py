"""Column Types — timezone-safe DateTime shared by all models.

Invariants:
    - Values loaded from the database are always timezone-aware (UTC)

Design Decisions:
    - TypeDecorator over per-query fixups: SQLite drops tzinfo on storage, so
      naive values are tagged UTC on load and comparisons stay aware-vs-aware
"""

from datetime import timezone

from sqlalchemy import DateTime, TypeDecorator


class UTCDateTime(TypeDecorator):
    """DateTime type that ensures UTC timezone on load."""
    impl = DateTime
    cache_ok = True

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
