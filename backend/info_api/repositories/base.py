"""
Info API — Generic Async Repository
====================================

What:  CRUD + paging over one SQLAlchemy model, bound to one AsyncSession.
Why:   Route handlers talk to a small capability set (save, find_by_id,
       exists_by_id, find_all, delete_by_id) instead of building SQL, so they
       can be unit-tested against a mock.
How:   Subclasses set `model`; every method runs inside the caller's session
       and only flushes. Writers call commit() before building their
       response; a commit error must reach the client as a 500.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import asc, delete, desc, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from info_api.database import Base
from info_api.exceptions import ValidationError
from info_api.schemas.common import Direction, PageRequest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@dataclass
class Page(Generic[ModelT]):
    """
    One slice of a larger ordered result set plus metadata about the whole set.

    Attributes:
        content:      Entities on this page, in query order
        page_request: The request that produced this page
        total:        Number of entities in the full result set
    """
    content: List[ModelT]
    page_request: PageRequest
    total: int = 0

    @property
    def number(self) -> int:
        return self.page_request.page

    @property
    def size(self) -> int:
        return self.page_request.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


class AsyncRepository(Generic[ModelT]):
    """
    Base repository for models with a single `id` primary key.

    Capabilities: save, find_by_id, exists_by_id, find_all, delete_by_id,
    commit.

    Stateless apart from the session reference: one instance per request.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, entity: ModelT) -> ModelT:
        """
        Insert a new entity or fully replace an existing one.

        Entities without an id are added and receive a database-assigned id
        on flush. Entities with an id are merged: every column attribute set
        on the given instance overwrites the stored row.
        """
        if entity.id is None:
            self.session.add(entity)
        else:
            entity = await self.session.merge(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        logger.debug("Saved %s id=%s", self.model.__name__, entity.id)
        return entity

    async def find_by_id(self, entity_id: Any) -> Optional[ModelT]:
        return await self.session.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: Any) -> bool:
        stmt = select(exists().where(self.model.id == entity_id))
        return bool(await self.session.scalar(stmt))

    async def find_all(self, page_request: PageRequest) -> Page[ModelT]:
        """
        Return one page of entities and the total row count.

        Ordering follows `page_request.sort`; with no sort the primary key
        ascending keeps pages stable between requests.

        Raises:
            ValidationError: A sort property is not a column of the model.
        """
        query = select(self.model)
        for order in self._order_by(page_request):
            query = query.order_by(order)
        query = query.offset(page_request.offset).limit(page_request.size)

        result = await self.session.execute(query)
        content = list(result.scalars().all())

        total = await self.session.scalar(select(func.count()).select_from(self.model)) or 0

        return Page(content=content, page_request=page_request, total=total)

    async def delete_by_id(self, entity_id: Any) -> None:
        """Delete by primary key. A missing row is not an error."""
        await self.session.execute(delete(self.model).where(self.model.id == entity_id))
        await self.session.flush()

    async def commit(self) -> None:
        """Commit the session's transaction. Storage errors propagate to the caller."""
        await self.session.commit()

    def _order_by(self, page_request: PageRequest) -> list:
        columns = self.model.__table__.columns
        if not page_request.sort:
            return [asc(columns["id"])]

        orders = []
        for order in page_request.sort:
            if order.property not in columns:
                raise ValidationError(
                    message=f"Cannot sort by unknown property '{order.property}'",
                    field="sort",
                    context={"allowed": sorted(columns.keys())},
                )
            column = columns[order.property]
            orders.append(desc(column) if order.direction == Direction.DESC else asc(column))
        return orders
