from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base import BaseRepository
from spendwise.models.user import UserDB


class UserRepository(BaseRepository[UserDB]):
    def __init__(self):
        super().__init__(UserDB)

    async def get_by_external_id(self, db: AsyncSession, external_user_id: str) -> Optional[UserDB]:
        """Get user by identity-provider subject"""
        result = await db.execute(
            select(UserDB).where(UserDB.external_user_id == external_user_id)
        )
        return result.scalar_one_or_none()

    async def create_user(
        self,
        db: AsyncSession,
        external_user_id: str,
        name: Optional[str],
        image_url: Optional[str],
        email: Optional[str]
    ) -> UserDB:
        return await self.create(
            db,
            external_user_id=external_user_id,
            name=name,
            image_url=image_url,
            email=email
        )
