from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi.encoders import jsonable_encoder
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult
from pymongo.server_api import ServerApi

from serene_stays.config import Config


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


ROOMS = "rooms"
BOOKINGS = "bookings"
USERS = "users"


class Database:
    """Long-lived handle over the three collections the API serves.

    Built once per process and handed to the app factory. The driver owns
    connection pooling, so a single instance is shared by every request.
    """

    def __init__(self, client: Any, name: str):
        self._client = client
        self._db = client[name]

    @property
    def rooms(self) -> Collection:
        return self._db[ROOMS]

    @property
    def bookings(self) -> Collection:
        return self._db[BOOKINGS]

    @property
    def users(self) -> Collection:
        return self._db[USERS]

    def ping(self) -> bool:
        """Round-trip to the server. Returns False (and logs) on failure."""
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            _debug(f"ping failed: {e}")
            return False
        _debug("Pinged your deployment. You successfully connected to MongoDB!")
        return True

    def close(self) -> None:
        self._client.close()


def open_database(cfg: Config) -> Database:
    """Create the MongoClient (Stable API v1) and wrap it.

    MongoClient connects lazily, so this does not block on the network.
    """
    client: MongoClient = MongoClient(
        cfg.MONGODB_URI,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )
    _debug(f"opened client for database={cfg.MONGODB_DB_NAME}")
    return Database(client, cfg.MONGODB_DB_NAME)


# -----------------------------
# Identifiers / serialization
# -----------------------------


def parse_object_id(raw: str) -> Optional[ObjectId]:
    """Return an ObjectId for a 24-char hex string, or None if malformed."""
    try:
        return ObjectId(str(raw))
    except (InvalidId, TypeError):
        return None


def to_json(value: Any) -> Any:
    """Make driver output JSON-safe (ObjectId -> hex string)."""
    return jsonable_encoder(value, custom_encoder={ObjectId: str})


def insert_result(res: InsertOneResult) -> Dict[str, Any]:
    return {
        "acknowledged": bool(res.acknowledged),
        "insertedId": to_json(res.inserted_id),
    }


def update_result(res: UpdateResult) -> Dict[str, Any]:
    upserted_id = res.upserted_id
    return {
        "acknowledged": bool(res.acknowledged),
        "modifiedCount": int(res.modified_count),
        "upsertedId": to_json(upserted_id),
        "upsertedCount": 0 if upserted_id is None else 1,
        "matchedCount": int(res.matched_count),
    }


def delete_result(res: DeleteResult) -> Dict[str, Any]:
    return {
        "acknowledged": bool(res.acknowledged),
        "deletedCount": int(res.deleted_count),
    }
