"""Question Service — one SQL statement per operation, plus list-time enrichment.

Invariants:
    - Each operation runs exactly one statement against the question table
    - SQLAlchemy failures are rolled back, logged and re-raised as DatabaseError
    - update touches only where_asked and last_updated
    - update/delete on a missing id are silent no-ops (affected row count logged)
    - list never fails because of enrichment: any lookup exception or timeout
      falls back to the base records with status "unavailable"

Design Decisions:
    - Enrichment runs as an awaited task bounded by asyncio.wait_for: a slow
      collaborator delays the listing by at most timeout_seconds
    - Enrichment status returned alongside records so the route can expose it
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thoughtcode.core.enrichment_merge import (
    collect_description_urls, merge_enrichment,
)
from thoughtcode.core.errors import (
    DatabaseError, EnrichmentServiceError, ErrorContext, ResourceNotFoundError,
)
from thoughtcode.core.repository_protocols import EnrichmentClient
from thoughtcode.models.question import Question
from thoughtcode.schemas.question import (
    QuestionCreate, QuestionResponse, QuestionUpdate,
)

logger = logging.getLogger(__name__)

ENRICHMENT_DISABLED = "disabled"
ENRICHMENT_COMPLETE = "complete"
ENRICHMENT_PARTIAL = "partial"
ENRICHMENT_UNAVAILABLE = "unavailable"


@dataclass
class QuestionListing:
    records: list[dict]
    enrichment_status: str


@asynccontextmanager
async def _statement(
    db: AsyncSession, operation: str, question_id: int | None = None,
) -> AsyncGenerator[None, None]:
    """Map SQLAlchemy failures of one statement to DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Question {operation} failed: {e}",
            extra={"operation": operation, "question_id": question_id},
        )
        raise DatabaseError(
            f"Unable to {operation} question", operation,
            ErrorContext(question_id=question_id, operation=operation),
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def create_question(db: AsyncSession, body: QuestionCreate) -> None:
    """Insert one question stamped with the current server time."""
    async with _statement(db, "create"):
        question = Question(
            title=body.title,
            description_url=body.description_url,
            description=body.description,
            is_asked=body.is_asked,
            coding_round=body.coding_round,
            where_asked=body.where_asked,
            last_updated=_now(),
        )
        db.add(question)
        await db.commit()
    logger.info("Question created", extra={"question_id": question.id})


async def update_where_asked(
    db: AsyncSession, question_id: int, body: QuestionUpdate,
) -> int:
    """Set where_asked on one row. Returns affected row count."""
    async with _statement(db, "update", question_id):
        result = await db.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(where_asked=body.where_asked, last_updated=_now()),
        )
        await db.commit()
    if result.rowcount == 0:
        logger.info(
            "Update matched no question", extra={"question_id": question_id},
        )
    return result.rowcount


async def delete_question(db: AsyncSession, question_id: int) -> int:
    """Delete one row. Returns affected row count."""
    async with _statement(db, "delete", question_id):
        result = await db.execute(
            delete(Question).where(Question.id == question_id),
        )
        await db.commit()
    if result.rowcount == 0:
        logger.info(
            "Delete matched no question", extra={"question_id": question_id},
        )
    return result.rowcount


async def get_question(db: AsyncSession, question_id: int) -> dict:
    async with _statement(db, "read", question_id):
        result = await db.execute(
            select(Question).where(Question.id == question_id),
        )
        question = result.scalar_one_or_none()
    if question is None:
        raise ResourceNotFoundError(
            "Question", str(question_id), ErrorContext(question_id=question_id),
        )
    return QuestionResponse.model_validate(question).to_json()


async def list_questions(
    db: AsyncSession,
    enrichment: EnrichmentClient | None,
    timeout_seconds: float,
) -> QuestionListing:
    """All questions ordered by where_asked, merged with supplementary fields."""
    async with _statement(db, "list"):
        result = await db.execute(
            select(Question).order_by(Question.where_asked, Question.id),
        )
        questions = result.scalars().all()
    records = [QuestionResponse.model_validate(q).to_json() for q in questions]

    if enrichment is None:
        status = ENRICHMENT_DISABLED
    else:
        records, status = await _enrich(records, enrichment, timeout_seconds)

    logger.info(
        f"{len(records)} questions returned",
        extra={"record_count": len(records), "enrichment_status": status},
    )
    return QuestionListing(records=records, enrichment_status=status)


async def _enrich(
    records: list[dict], enrichment: EnrichmentClient, timeout_seconds: float,
) -> tuple[list[dict], str]:
    urls = collect_description_urls(records)
    if not urls:
        return records, ENRICHMENT_COMPLETE
    try:
        entries = await asyncio.wait_for(
            enrichment.lookup(urls), timeout=timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            f"Enrichment lookup exceeded {timeout_seconds}s, returning base records",
            extra={"url_count": len(urls)},
        )
        return records, ENRICHMENT_UNAVAILABLE
    except EnrichmentServiceError as e:
        logger.warning(
            f"Enrichment unavailable, returning base records: {e.message}",
            extra={"error_code": e.code, "url_count": len(urls)},
        )
        return records, ENRICHMENT_UNAVAILABLE
    except Exception as e:
        logger.error(
            f"Enrichment lookup raised {type(e).__name__}, returning base records",
            exc_info=True,
            extra={"url_count": len(urls)},
        )
        return records, ENRICHMENT_UNAVAILABLE

    merged = merge_enrichment(records, entries)
    if merged.missing_urls:
        logger.warning(
            f"No enrichment entry for {len(merged.missing_urls)} URL(s): "
            f"{', '.join(merged.missing_urls)}",
            extra={"missing_count": len(merged.missing_urls)},
        )
        return merged.records, ENRICHMENT_PARTIAL
    return merged.records, ENRICHMENT_COMPLETE
