import logging
import jwt
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from spendwise.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class IdentityClaims:
    """Profile fields carried by an identity-provider token"""
    subject: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    email_addresses: List[str] = field(default_factory=list)

    @property
    def primary_email(self) -> Optional[str]:
        return self.email_addresses[0] if self.email_addresses else None

    @property
    def full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)


def _email_list(raw: Any) -> List[str]:
    # Providers send either plain strings or {"email_address": ...} objects
    emails = []
    for item in raw or []:
        if isinstance(item, str):
            emails.append(item)
        elif isinstance(item, dict) and item.get("email_address"):
            emails.append(item["email_address"])
    return emails


class IdentityService:
    @staticmethod
    def decode_token(token: str) -> Optional[Dict[str, Any]]:
        """Decode and validate an identity-provider JWT"""
        options = {"require": ["sub", "exp"]}
        if not settings.IDENTITY_JWT_AUDIENCE:
            options["verify_aud"] = False
        try:
            return jwt.decode(
                token,
                settings.IDENTITY_JWT_SECRET,
                algorithms=[settings.IDENTITY_JWT_ALGORITHM],
                audience=settings.IDENTITY_JWT_AUDIENCE,
                issuer=settings.IDENTITY_JWT_ISSUER,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            logger.info("Identity token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected identity token: {e}")
            return None

    @classmethod
    def decode_identity_token(cls, token: str) -> Optional[IdentityClaims]:
        """Turn a verified token into IdentityClaims, or None if it is not valid"""
        payload = cls.decode_token(token)
        if not payload:
            return None
        return IdentityClaims(
            subject=str(payload["sub"]),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            image_url=payload.get("image_url"),
            email_addresses=_email_list(payload.get("email_addresses")),
        )
