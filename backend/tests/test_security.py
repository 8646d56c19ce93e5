from datetime import timedelta

import pytest
from jose import jwt

from newsdesk.core.config import settings
from newsdesk.core.errors import Unauthorized
from newsdesk.core.security import (
    create_access_token, decode_access_token, get_password_hash, verify_password
)


def test_token_carries_account_claims():
    token = create_access_token(7, "Staff", email="staff@example.com")
    payload = decode_access_token(token)

    assert payload["sub"] == "7"
    assert payload["role"] == "Staff"
    assert payload["email"] == "staff@example.com"
    assert payload["iss"] == settings.JWT_ISSUER
    assert payload["aud"] == settings.JWT_AUDIENCE
    assert payload["jti"]


def test_each_token_has_its_own_id():
    first = decode_access_token(create_access_token(1, "Admin"))
    second = decode_access_token(create_access_token(1, "Admin"))
    assert first["jti"] != second["jti"]


def test_expired_token_is_rejected():
    token = create_access_token(1, "Admin", expires_delta=timedelta(seconds=-1))
    with pytest.raises(Unauthorized):
        decode_access_token(token)


def test_token_for_another_audience_is_rejected():
    token = jwt.encode(
        {"sub": "1", "iss": settings.JWT_ISSUER, "aud": "someone-else"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    with pytest.raises(Unauthorized):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode(
        {"sub": "1", "iss": settings.JWT_ISSUER, "aud": settings.JWT_AUDIENCE},
        "another-key",
        algorithm=settings.ALGORITHM,
    )
    with pytest.raises(Unauthorized):
        decode_access_token(token)


def test_password_hashing():
    hashed = get_password_hash("Secret#123")
    assert hashed.startswith("$5$")
    assert verify_password("Secret#123", hashed)
    assert not verify_password("secret#123", hashed)
    assert not verify_password("", hashed)
    assert not verify_password("Secret#123", "")
