"""
Info API — Thema SQLAlchemy Model
==================================

What:  ORM model for the `thema` table.
Who:   Used by ThemaRepository for CRUD and by Alembic for schema management.

Table Design:
    - id: 64-bit surrogate key assigned by the database on insert
    - name, rechte: free text up to 255 characters, nullable
    - displaycount: integer counter, nullable

    All three payload columns are nullable: a merge-patch may clear them.
"""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from info_api.database import Base

# SQLite only autoincrements an INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Thema(Base):
    """
    A topic with a display name, an access-rights label, and a display counter.

    Lifecycle:
        1. Created by POST /api/themas (database assigns id)
        2. Replaced by PUT or merged by PATCH; id never changes
        3. Removed by DELETE
    """

    __tablename__ = "thema"

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # "Rechte" = rights; the label of who may see this topic
    rechte: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    displaycount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Thema(id={self.id}, name={self.name!r}, "
            f"rechte={self.rechte!r}, displaycount={self.displaycount})>"
        )
