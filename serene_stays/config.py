import os
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote_plus

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


DEFAULT_CORS_ORIGINS = ",".join(
    [
        "http://localhost:5173",
        "https://serene-stays-727c7.web.app",
        "https://serene-stays-727c7.firebaseapp.com",
        "https://serene-stays-001.netlify.app",
    ]
)


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


def _atlas_uri() -> str:
    """Build the Atlas SRV URI from DB_USER / DB_PASS.

    Credentials are URL-quoted so passwords containing '@' or ':' survive.
    """
    user = quote_plus(os.environ.get("DB_USER", ""))
    password = quote_plus(os.environ.get("DB_PASS", ""))
    host = os.environ.get("MONGODB_HOST", "cluster0.8gru8.mongodb.net")
    return (
        f"mongodb+srv://{user}:{password}@{host}/"
        "?retryWrites=true&w=majority&appName=Cluster0"
    )


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide credentials via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # Database (MongoDB)
    # -----------------
    # Preferred: set MONGODB_URI directly (e.g. mongodb://localhost:27017).
    # Fallback: DB_USER / DB_PASS against the Atlas cluster in MONGODB_HOST.
    MONGODB_URI: str = os.environ.get("MONGODB_URI") or _atlas_uri()
    MONGODB_DB_NAME: str = os.environ.get("MONGODB_DB_NAME", "sereneStaysDB")

    # Round-trip to the server once at startup. Failures are logged, not fatal.
    MONGODB_PING_ON_STARTUP: bool = _env_bool("MONGODB_PING_ON_STARTUP", False) is True

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set ACCESS_TOKEN_SECRET to a strong random value.
    ACCESS_TOKEN_SECRET: str = os.environ.get("ACCESS_TOKEN_SECRET", "dev_change_me")
    AUTH_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("AUTH_TOKEN_EXPIRE_MINUTES", "60"))

    AUTH_COOKIE_NAME: str = os.environ.get("AUTH_COOKIE_NAME", "token")
    AUTH_COOKIE_PATH: str = os.environ.get("AUTH_COOKIE_PATH", "/")

    # "production" switches cookies to SameSite=None + Secure so the
    # separately hosted frontend can send them cross-site.
    APP_ENV: str = (
        os.environ.get("APP_ENV")
        or os.environ.get("NODE_ENV")
        or "development"
    ).strip().lower()

    # -----------------
    # HTTP server
    # -----------------
    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", "5000"))

    # -----------------
    # CORS
    # -----------------
    # Comma-separated list of frontend origins allowed to send credentials.
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    def cors_origins(self) -> List[str]:
        return [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]


def load_config() -> Config:
    return Config()
