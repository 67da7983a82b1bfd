"""Question Routes — create, update, delete, get and list interview questions.

Invariants:
    - Bodies and path ids validated by FastAPI/Pydantic before the handler runs
      (bad JSON, wrong types, non-integer or out-of-range ids → 400 via
      error_handlers)
    - Mutations answer 200 with an empty body, including no-op update/delete
    - List always answers; X-Enrichment-Status reports the merge outcome

Design Decisions:
    - PUT and PATCH share one handler: both only replace where_asked
    - Enrichment client injected via get_enrichment_client so tests can swap it
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from thoughtcode.config import Settings, get_settings
from thoughtcode.core.repository_protocols import EnrichmentClient
from thoughtcode.infrastructure.database import get_db
from thoughtcode.infrastructure.enrichment_client import get_enrichment_client
from thoughtcode.schemas.question import QuestionCreate, QuestionUpdate
from thoughtcode.services import question_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/questions", tags=["questions"])

ENRICHMENT_STATUS_HEADER = "X-Enrichment-Status"

# qid is a 32-bit INTEGER column; larger ids are rejected before the driver sees them
QuestionId = Annotated[int, Path(ge=1, le=2**31 - 1)]


@router.post("", status_code=status.HTTP_200_OK)
async def create_question(
    body: QuestionCreate, db: AsyncSession = Depends(get_db),
):
    """Insert a question; absent fields are stored as NULL."""
    await question_service.create_question(db, body)
    return Response(status_code=status.HTTP_200_OK)


@router.api_route("/{question_id}", methods=["PUT", "PATCH"])
async def update_question(
    question_id: QuestionId,
    body: QuestionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Replace the where-asked category of one question."""
    await question_service.update_where_asked(db, question_id, body)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{question_id}")
async def delete_question(
    question_id: QuestionId, db: AsyncSession = Depends(get_db),
):
    await question_service.delete_question(db, question_id)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{question_id}")
async def get_question(
    question_id: QuestionId, db: AsyncSession = Depends(get_db),
):
    """Get one question (404 when absent)."""
    return await question_service.get_question(db, question_id)


@router.get("")
async def list_questions(
    db: AsyncSession = Depends(get_db),
    enrichment: EnrichmentClient | None = Depends(get_enrichment_client),
    settings: Settings = Depends(get_settings),
):
    """List questions ordered by where-asked, merged with enrichment fields."""
    listing = await question_service.list_questions(
        db, enrichment, settings.enrichment_timeout_seconds,
    )
    return JSONResponse(
        content=listing.records,
        headers={ENRICHMENT_STATUS_HEADER: listing.enrichment_status},
    )
