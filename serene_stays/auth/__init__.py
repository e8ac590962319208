"""Authentication helpers.

Auth is deliberately stateless:

- `POST /jwt` signs whatever identity the frontend sends (after its own
  sign-in) into a short-lived JWT
- the JWT travels in an httpOnly cookie and is verified on guarded routes

Nothing is stored server-side; logout just expires the cookie.
"""

from .deps import get_current_user
from .security import create_access_token, decode_access_token

__all__ = [
    "get_current_user",
    "create_access_token",
    "decode_access_token",
]
