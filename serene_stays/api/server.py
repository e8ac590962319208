from __future__ import annotations

from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from serene_stays.auth import create_access_token, get_current_user
from serene_stays.config import Config, load_config
from serene_stays.db import (
    Database,
    delete_result,
    insert_result,
    open_database,
    parse_object_id,
    to_json,
    update_result,
)
from serene_stays.schema import USER_PUBLIC_FIELDS, Booking, User, booking_document, document


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


router = APIRouter()


# -----------------------------
# Dependencies
# -----------------------------


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise HTTPException(status_code=500, detail="server_config_missing")
    return cfg


def get_database(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=500, detail="database_not_configured")
    return db


def log_request(request: Request) -> None:
    """Access log for the busier routes. Never rejects."""
    url = request.url
    target = url.path + (f"?{url.query}" if url.query else "")
    _debug(f"Called: {url.hostname} {target}")


def _object_id(raw: str) -> ObjectId:
    oid = parse_object_id(raw)
    if oid is None:
        raise HTTPException(status_code=400, detail="invalid_id")
    return oid


# -----------------------------
# Health
# -----------------------------


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Serene Stays Server running"


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


# -----------------------------
# Auth
# -----------------------------


def _cookie_options(cfg: Config) -> Dict[str, Any]:
    """Attributes shared by the set and clear paths.

    Production frontends live on another site, so the cookie must be
    SameSite=None, which browsers only accept together with Secure.
    """
    production = cfg.is_production
    return {
        "httponly": True,
        "samesite": "none" if production else "strict",
        "secure": production,
        "path": str(getattr(cfg, "AUTH_COOKIE_PATH", "/") or "/"),
    }


@router.post("/jwt", dependencies=[Depends(log_request)])
def issue_token(
    response: Response,
    identity: Dict[str, Any] = Body(...),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    """Sign the posted identity and set it as the session cookie."""
    token = create_access_token(
        secret=cfg.ACCESS_TOKEN_SECRET,
        identity=identity,
        expires_minutes=int(cfg.AUTH_TOKEN_EXPIRE_MINUTES),
    )
    response.set_cookie(
        key=cfg.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(cfg.AUTH_TOKEN_EXPIRE_MINUTES) * 60,
        **_cookie_options(cfg),
    )
    _debug(f"issued session for email={identity.get('email')}")
    return {"success": True}


@router.post("/logout")
def logout(response: Response, cfg: Config = Depends(get_config)) -> Dict[str, Any]:
    """Expire the session cookie. Safe to call without one."""
    response.delete_cookie(key=cfg.AUTH_COOKIE_NAME, **_cookie_options(cfg))
    return {"success": True}


# -----------------------------
# Rooms
# -----------------------------


@router.get("/allrooms", dependencies=[Depends(log_request)])
def list_rooms(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return to_json(list(db.rooms.find()))


@router.get("/allrooms/{room_id}")
def get_room(room_id: str, db: Database = Depends(get_database)) -> Optional[Dict[str, Any]]:
    return to_json(db.rooms.find_one({"_id": _object_id(room_id)}))


# Overwrites Availability wholesale; its shape is owned by the frontend.
@router.patch("/allrooms/{room_id}")
def update_room_availability(
    room_id: str,
    availability: Any = Body(...),
    db: Database = Depends(get_database),
) -> Dict[str, Any]:
    res = db.rooms.update_one(
        {"_id": _object_id(room_id)},
        {"$set": {"Availability": availability}},
    )
    return update_result(res)


# -----------------------------
# Users
# -----------------------------


@router.post("/users", dependencies=[Depends(log_request)])
def create_user(payload: User, db: Database = Depends(get_database)) -> Dict[str, Any]:
    return insert_result(db.users.insert_one(document(payload)))


@router.get("/users")
def list_users(
    email: Optional[str] = Query(default=None),
    db: Database = Depends(get_database),
) -> List[Dict[str, Any]]:
    query: Dict[str, Any] = {}
    if email:
        query["email"] = email
    projection = {"_id": 0, **{k: 1 for k in USER_PUBLIC_FIELDS}}
    return to_json(list(db.users.find(query, projection)))


# -----------------------------
# Bookings
# -----------------------------


@router.get("/bookings", dependencies=[Depends(log_request)])
def list_bookings(
    email: Optional[str] = Query(default=None),
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_database),
) -> List[Dict[str, Any]]:
    """Bookings of the logged-in user only."""
    if email != user.get("email"):
        raise HTTPException(status_code=403, detail="forbidden_access")

    query: Dict[str, Any] = {}
    if email:
        query["email"] = email
    return to_json(list(db.bookings.find(query)))


# NOTE: create/update/delete below are not owner-checked; any caller may act
# on any booking id.
@router.post("/bookings")
def create_booking(payload: Booking, db: Database = Depends(get_database)) -> Dict[str, Any]:
    return insert_result(db.bookings.insert_one(booking_document(payload)))


@router.delete("/bookings/{booking_id}")
def delete_booking(booking_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    return delete_result(db.bookings.delete_one({"_id": _object_id(booking_id)}))


@router.patch("/bookings/{booking_id}")
def update_booking_date(
    booking_id: str,
    booked_date: Any = Body(...),
    db: Database = Depends(get_database),
) -> Dict[str, Any]:
    res = db.bookings.update_one(
        {"_id": _object_id(booking_id)},
        {"$set": {"bookedDate": booked_date}},
    )
    return update_result(res)


# -----------------------------
# App factory
# -----------------------------


def create_app(cfg: Optional[Config] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API around an explicit config and database handle.

    When no database is given, one is opened at startup from `cfg` and
    closed at shutdown. An injected database is left for the caller to close.
    """
    cfg = cfg or load_config()
    app = FastAPI(title="Serene Stays API", version="0.1.0")
    app.state.cfg = cfg
    app.state.db = database

    origins = cfg.cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(router)

    owns_db = database is None

    @app.on_event("startup")
    def _on_startup() -> None:
        if app.state.db is None:
            app.state.db = open_database(cfg)
        if cfg.MONGODB_PING_ON_STARTUP:
            app.state.db.ping()
        _debug(f"Serene Stays Server running on port {cfg.PORT} env={cfg.APP_ENV}")

    @app.on_event("shutdown")
    def _on_shutdown() -> None:
        if owns_db and app.state.db is not None:
            app.state.db.close()
            app.state.db = None

    return app


app = create_app()
