from datetime import datetime, timedelta, timezone

import jwt
import pytest

from serene_stays.auth.security import create_access_token, decode_access_token


def test_roundtrip_keeps_identity():
    token = create_access_token(
        secret="s", identity={"email": "a@x.com", "name": "A"}, expires_minutes=60
    )
    payload = decode_access_token(token=token, secret="s")
    assert payload["email"] == "a@x.com"
    assert payload["name"] == "A"
    assert payload["exp"] - payload["iat"] == 3600


def test_expired_token_is_rejected():
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = create_access_token(
        secret="s", identity={"email": "a@x.com"}, expires_minutes=60, issued_at=issued
    )
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token=token, secret="s")


def test_wrong_secret_is_rejected():
    token = create_access_token(secret="s", identity={"email": "a@x.com"}, expires_minutes=60)
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token=token, secret="other")


def test_empty_identity_still_signs():
    token = create_access_token(secret="s", identity={}, expires_minutes=60)
    payload = decode_access_token(token=token, secret="s")
    assert set(payload) == {"iat", "exp"}


def test_client_cannot_extend_expiry():
    token = create_access_token(
        secret="s", identity={"email": "a@x.com", "exp": 4102444800}, expires_minutes=60
    )
    payload = decode_access_token(token=token, secret="s")
    assert payload["exp"] - payload["iat"] == 3600


def test_blank_secret():
    with pytest.raises(ValueError):
        create_access_token(secret="", identity={"email": "a@x.com"}, expires_minutes=60)


def test_registered_claims_in_identity_are_not_checked():
    token = create_access_token(
        secret="s", identity={"email": "a@x.com", "aud": "web", "sub": 42, "jti": 7}, expires_minutes=60
    )
    payload = decode_access_token(token=token, secret="s")
    assert payload["aud"] == "web"
    assert payload["sub"] == 42
