import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from spendwise.core.security import IdentityClaims
from spendwise.models.user import UserDB
from spendwise.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository()

    async def check_user(self, identity: Optional[IdentityClaims]) -> Optional[UserDB]:
        """
        Resolve the internal user for an authenticated identity.

        Returns None when there is no identity. The first time a subject is
        seen a user record is created from the provider's profile fields.
        """
        if identity is None:
            return None

        user = await self.user_repo.get_by_external_id(self.db, identity.subject)
        if user:
            return user

        try:
            user = await self.user_repo.create_user(
                self.db,
                external_user_id=identity.subject,
                name=identity.full_name or None,
                image_url=identity.image_url,
                email=identity.primary_email
            )
        except IntegrityError:
            # Another request created the same subject first
            await self.db.rollback()
            return await self.user_repo.get_by_external_id(self.db, identity.subject)

        logger.info(f"Created user {user.id} for identity {identity.subject}")
        return user
