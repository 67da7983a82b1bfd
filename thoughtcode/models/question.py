"""Question ORM — persists one interview question and its metadata.

Invariants:
    - id is an integer primary key assigned by the database (column "qid")
    - last_updated is set by the application on every insert and update
    - All descriptive columns are nullable (create passes absent fields as NULL)

Design Decisions:
    - Attribute names differ from legacy column names (qid, last_updated_dttm):
      the table layout stays compatible with existing databases
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from thoughtcode.db.base import Base
from thoughtcode.db.types import UTCDateTime


class Question(Base):
    """Interview question record."""
    __tablename__ = "question"

    id: Mapped[int] = mapped_column(
        "qid", Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_asked: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    coding_round: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    where_asked: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    last_updated: Mapped[datetime] = mapped_column(
        "last_updated_dttm",
        UTCDateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
