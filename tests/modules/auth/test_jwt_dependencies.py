# -*- coding: utf-8 -*-
"""
Tests de la validación de JWT del proveedor de identidad.

Autor: Ixchel Beristain
Fecha: 2026-10-11
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.modules.auth import get_current_user_id, validate_jwt_token
from app.modules.auth.security import TokenDecodeError, create_access_token, decode_access_token
from app.shared.config import get_settings
from app.shared.utils.http_exceptions import UnauthorizedException


def _raw_token(claims):
    settings = get_settings()
    return jwt.encode(claims, settings.jwt_secret_key.get_secret_value(), algorithm=settings.jwt_algorithm)


def test_token_roundtrip_keeps_subject_and_extra_claims():
    token = create_access_token("user_123", email="ana@example.com")
    payload = decode_access_token(token)
    assert payload["sub"] == "user_123"
    assert payload["email"] == "ana@example.com"
    assert validate_jwt_token(token) == "user_123"


def test_expired_token_is_rejected():
    token = create_access_token("user_123", expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenDecodeError):
        decode_access_token(token)
    with pytest.raises(UnauthorizedException) as ei:
        validate_jwt_token(token)
    assert ei.value.status_code == 401


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"sub": "user_123"}, "another-secret", algorithm="HS256")
    with pytest.raises(UnauthorizedException):
        validate_jwt_token(token)


def test_token_without_subject_is_rejected():
    with pytest.raises(TokenDecodeError, match="sub"):
        decode_access_token(_raw_token({"email": "ana@example.com"}))


@pytest.mark.asyncio
async def test_missing_bearer_is_unauthorized():
    with pytest.raises(UnauthorizedException):
        await get_current_user_id(token=None)


@pytest.mark.asyncio
async def test_bearer_resolves_user_id():
    assert await get_current_user_id(token=create_access_token("user_456")) == "user_456"
