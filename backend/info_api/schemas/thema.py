"""
Info API — Thema Request/Response Schema
=========================================

What:  Pydantic model for the Thema API contract.
Why:   One shape serves POST, PUT, PATCH bodies and every response. The
       create/update id rules are business rules enforced by ThemaResource,
       not by the schema, so `id` stays optional here.

Partial updates:
    Pydantic records which fields the client actually sent in
    `model_fields_set`. ThemaResource uses it to tell "field omitted"
    (keep stored value) from "field sent as null" (clear stored value).
"""

from typing import Optional

from pydantic import BaseModel, Field

from info_api.schemas.common import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN


class ThemaDTO(BaseModel):
    """
    What:  Representation of a Thema entity.
    Who:   Request body of POST/PUT/PATCH /api/themas, response of every Thema route.
    """
    id: Optional[int] = Field(
        default=None, ge=INT64_MIN, le=INT64_MAX, description="Identifier assigned by storage"
    )
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    rechte: Optional[str] = Field(default=None, max_length=255, description="Access rights label")
    displaycount: Optional[int] = Field(
        default=None, ge=INT32_MIN, le=INT32_MAX, description="Display counter"
    )

    model_config = {"from_attributes": True}
