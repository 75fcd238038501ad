"""
Insight source: serves the pre-computed insight records stored for a user
"""

import logging
from typing import List

from spendwise.database import session_scope
from spendwise.models.api import InsightRecord
from spendwise.repositories.insight import InsightRepository
from spendwise.services.insights_panel import InsightFetcher

logger = logging.getLogger(__name__)


class InsightSource:
    """Reads stored insights outside of any request scope"""

    def __init__(self, session_factory=session_scope):
        self.session_factory = session_factory
        self.insight_repo = InsightRepository()

    async def fetch(self, user_id: str) -> List[InsightRecord]:
        """Stored insights for a user, in display order. Errors propagate."""
        async with self.session_factory() as db:
            rows = await self.insight_repo.list_for_user(db, user_id)
        logger.debug(f"Fetched {len(rows)} insights for user {user_id}")
        return [InsightRecord.model_validate(row) for row in rows]

    def fetcher_for(self, user_id: str) -> InsightFetcher:
        """Zero-argument fetcher bound to one user"""
        async def fetch_insights() -> List[InsightRecord]:
            return await self.fetch(user_id)
        return fetch_insights


insight_source = InsightSource()
