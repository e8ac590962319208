from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt


_JWT_ALG = "HS256"


def create_access_token(
    *,
    secret: str,
    identity: Mapping[str, Any],
    expires_minutes: int,
    issued_at: Optional[datetime] = None,
) -> str:
    """Sign whatever identity the client logged in with.

    The identity is embedded as-is; only `iat`/`exp` are owned by the server.
    """
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = issued_at or datetime.now(timezone.utc)
    exp = now + timedelta(minutes=max(1, int(expires_minutes)))

    payload: Dict[str, Any] = dict(identity)
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int(exp.timestamp())
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def decode_access_token(*, token: str, secret: str) -> Dict[str, Any]:
    if not token:
        raise ValueError("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")
    # Only signature and expiry are enforced; the other registered claims are
    # part of the client identity and are not interpreted.
    return jwt.decode(
        token,
        secret,
        algorithms=[_JWT_ALG],
        options={"verify_aud": False, "verify_sub": False, "verify_jti": False},
    )
