"""
Info API — Shared Schemas
==========================

What:  Paging request models, the error envelope, and the health response.
Who:   PageRequest is built by the paging dependency and consumed by
       repositories; ErrorResponse and HealthResponse document the OpenAPI
       contract of the error handlers and the health route.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

# Value ranges of the BIGINT and INTEGER columns
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


# ══════════════════════════════════════════════════════════════════════════
# Paging
# ══════════════════════════════════════════════════════════════════════════


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    """One `ORDER BY` term: a property name and a direction."""
    property: str
    direction: Direction = Direction.ASC


class PageRequest(BaseModel):
    """
    What:  A request for one zero-based page of an ordered result set.
    How:   Built from ?page=&size=&sort= by `utils.pagination.get_page_request`.

    An empty `sort` means storage order (primary key ascending).
    """
    page: int = Field(default=0, ge=0, description="Zero-based page index")
    size: int = Field(default=20, ge=1, description="Items per page")
    sort: List[SortOrder] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Responses
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for 4xx/5xx JSON responses.

    Example (create with an id):
        {
            "error": "bad_request",
            "message": "A new thema cannot already have an ID",
            "details": {"entity_name": "thema", "error_key": "idexists"},
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health probe result for load balancers and monitoring."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
