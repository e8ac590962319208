from __future__ import annotations

from typing import Any, Dict

import jwt
from fastapi import HTTPException, Request

from .security import decode_access_token


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


def get_current_user(request: Request) -> Dict[str, Any]:
    """Authenticate a request from its session cookie.

    The decoded claims are also stored on `request.state.user` for anything
    running later in the same request.
    """

    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise HTTPException(status_code=500, detail="server_config_missing")

    cookie_name = str(getattr(cfg, "AUTH_COOKIE_NAME", "token") or "token")
    token = request.cookies.get(cookie_name)
    if not token:
        raise _unauthorized("missing_token")

    try:
        payload = decode_access_token(token=token, secret=cfg.ACCESS_TOKEN_SECRET)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("token_expired")
    except jwt.InvalidTokenError as e:
        _debug(f"rejected token: {e}")
        raise _unauthorized("token_invalid")

    request.state.user = payload
    return payload
