from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from .base import BaseRepository
from spendwise.models.insight import InsightDB


class InsightRepository(BaseRepository[InsightDB]):
    """Repository for stored insight records"""

    def __init__(self):
        super().__init__(InsightDB)

    async def list_for_user(self, db: AsyncSession, user_id: str) -> List[InsightDB]:
        """Get a user's insights in display order"""
        result = await db.execute(
            select(InsightDB)
            .where(InsightDB.user_id == user_id)
            .order_by(InsightDB.position)
        )
        return list(result.scalars().all())

    async def replace_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        items: List[Dict[str, Any]]
    ) -> List[InsightDB]:
        """Replace all of a user's insights; list order becomes display order"""
        await db.execute(delete(InsightDB).where(InsightDB.user_id == user_id))
        rows = [
            InsightDB(user_id=user_id, position=position, **item)
            for position, item in enumerate(items)
        ]
        db.add_all(rows)
        await db.commit()
        for row in rows:
            await db.refresh(row)
        return rows
