"""Tests for identity-provider token verification"""
import time

import jwt
import pytest

from spendwise.core.config import settings
from spendwise.core.security import IdentityService


def make_token(secret=None, **claims):
    payload = {"sub": "user_2abc", "exp": int(time.time()) + 300}
    payload.update(claims)
    payload = {k: v for k, v in payload.items() if v is not None}
    return jwt.encode(
        payload,
        secret or settings.IDENTITY_JWT_SECRET,
        algorithm=settings.IDENTITY_JWT_ALGORITHM
    )


class TestIdentityService:

    def test_valid_token_yields_profile(self):
        token = make_token(
            first_name="Ada",
            last_name="Lovelace",
            image_url="https://img.example.com/ada.png",
            email_addresses=["ada@example.com"],
        )

        identity = IdentityService.decode_identity_token(token)

        assert identity.subject == "user_2abc"
        assert identity.full_name == "Ada Lovelace"
        assert identity.image_url == "https://img.example.com/ada.png"
        assert identity.primary_email == "ada@example.com"

    def test_email_address_objects_are_flattened(self):
        token = make_token(email_addresses=[
            {"email_address": "ada@example.com", "id": "idn_1"},
            {"id": "idn_2"},
            "second@example.com",
        ])

        identity = IdentityService.decode_identity_token(token)

        assert identity.email_addresses == ["ada@example.com", "second@example.com"]

    def test_token_without_profile_fields(self):
        identity = IdentityService.decode_identity_token(make_token())

        assert identity.subject == "user_2abc"
        assert identity.full_name == ""
        assert identity.primary_email is None

    def test_expired_token_is_rejected(self):
        token = make_token(exp=int(time.time()) - 60)

        assert IdentityService.decode_identity_token(token) is None

    def test_wrong_signature_is_rejected(self):
        token = make_token(secret="some-other-secret-that-is-long-enough-for-hs256")

        assert IdentityService.decode_identity_token(token) is None

    def test_missing_subject_is_rejected(self):
        token = make_token(sub=None)

        assert IdentityService.decode_identity_token(token) is None

    def test_garbage_is_rejected(self):
        assert IdentityService.decode_identity_token("not-a-jwt") is None
