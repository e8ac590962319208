"""Boundary models for request bodies.

Documents stay schema-less in MongoDB: each model checks only the fields the
API relies on and keeps every other key the client sends (`extra="allow"`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Registration record posted by the frontend after sign-up."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., min_length=1)
    name: Optional[str] = None
    photoUrl: Optional[str] = None


# Only these fields of a stored user are ever returned.
USER_PUBLIC_FIELDS = ("name", "email", "photoUrl")


class Booking(BaseModel):
    """Reservation created from the room details page.

    `_id` is accepted so the frontend can post a previously fetched document
    back; a string id is never trusted (see `booking_document`).
    """

    model_config = ConfigDict(extra="allow")

    id: Any = Field(default=None, alias="_id")
    email: str = Field(..., min_length=1)


def document(model: BaseModel) -> Dict[str, Any]:
    """Fields the client actually sent, under their wire names."""
    return model.model_dump(by_alias=True, exclude_unset=True)


def booking_document(payload: Booking) -> Dict[str, Any]:
    """Insertable booking: client-chosen string ids are replaced.

    Non-string ids pass through to the driver; a missing id is generated by
    the driver on insert.
    """
    doc = document(payload)
    oid = doc.pop("_id", None)
    if isinstance(oid, str):
        oid = ObjectId()
    if oid is not None:
        doc["_id"] = oid
    return doc
