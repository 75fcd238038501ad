"""Stored insight endpoints"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spendwise.database import get_db
from spendwise.core.deps import get_current_user
from spendwise.models.api import InsightBatchRequest, InsightListResponse, InsightRecord
from spendwise.models.user import UserDB
from spendwise.repositories.insight import InsightRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=InsightListResponse)
@router.get("/", response_model=InsightListResponse)
async def list_insights(
    current_user: UserDB = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the current user's stored insights in display order"""
    insight_repo = InsightRepository()
    rows = await insight_repo.list_for_user(db, current_user.id)
    records = [InsightRecord.model_validate(row) for row in rows]
    return InsightListResponse(insights=records, count=len(records))


@router.put("", response_model=InsightListResponse)
@router.put("/", response_model=InsightListResponse)
async def replace_insights(
    request: InsightBatchRequest,
    current_user: UserDB = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Replace the current user's insights with a pre-computed set"""
    insight_repo = InsightRepository()
    rows = await insight_repo.replace_for_user(
        db, current_user.id, [item.model_dump() for item in request.insights]
    )
    logger.info(f"Stored {len(rows)} insights for user {current_user.id}")
    records = [InsightRecord.model_validate(row) for row in rows]
    return InsightListResponse(insights=records, count=len(records))
