from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from spendwise.database import session_scope
from spendwise.core.security import IdentityService, IdentityClaims
from spendwise.services.users import UserService
from spendwise.models.user import UserDB
from typing import Optional

security = HTTPBearer(auto_error=False)


async def get_identity_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[IdentityClaims]:
    """Identity from the provider's bearer token, or None for guests"""
    if not credentials:
        return None
    return IdentityService.decode_identity_token(credentials.credentials)


async def get_current_user_optional(
    identity: Optional[IdentityClaims] = Depends(get_identity_optional)
) -> Optional[UserDB]:
    """
    Resolved user, created on first sight; None when unauthenticated.

    Guests never touch the database: the session is opened only once an
    identity has been verified.
    """
    if identity is None:
        return None
    async with session_scope() as db:
        return await UserService(db).check_user(identity)


async def get_current_user(
    user: Optional[UserDB] = Depends(get_current_user_optional)
) -> UserDB:
    """Dependency to get current authenticated user"""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_panel_registry():
    """Registry of mounted insights panels"""
    from spendwise.services.panel_registry import panel_registry
    return panel_registry
