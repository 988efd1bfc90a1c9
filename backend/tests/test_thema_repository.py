"""
Info API — ThemaRepository Tests
=================================

What:  The repository contract against a real (in-memory SQLite) session:
       insert vs. replace, existence, paging and sorting, idempotent delete.
"""

import pytest

from info_api.exceptions import ValidationError
from info_api.models.thema import Thema
from info_api.repositories.thema_repository import ThemaRepository
from info_api.schemas.common import Direction, PageRequest, SortOrder


async def seed(repository, *names):
    return [await repository.save(Thema(name=name, rechte="R", displaycount=i)) for i, name in enumerate(names)]


class TestSave:

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, db_session):
        repository = ThemaRepository(db_session)

        saved = await repository.save(Thema(name="A", rechte="R", displaycount=0))

        assert saved.id is not None
        assert await repository.exists_by_id(saved.id)

    @pytest.mark.asyncio
    async def test_save_with_id_replaces_every_column(self, db_session):
        repository = ThemaRepository(db_session)
        (original,) = await seed(repository, "A")

        replaced = await repository.save(
            Thema(id=original.id, name="B", rechte=None, displaycount=None)
        )

        assert replaced.id == original.id
        assert (replaced.name, replaced.rechte, replaced.displaycount) == ("B", None, None)
        stored = await repository.find_by_id(original.id)
        assert stored.name == "B"
        assert stored.rechte is None


class TestLookup:

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, db_session):
        assert await ThemaRepository(db_session).find_by_id(999) is None

    @pytest.mark.asyncio
    async def test_exists_by_id_missing_is_false(self, db_session):
        assert await ThemaRepository(db_session).exists_by_id(999) is False


class TestFindAll:

    @pytest.mark.asyncio
    async def test_default_order_is_primary_key(self, db_session):
        repository = ThemaRepository(db_session)
        await seed(repository, "C", "A", "B")

        page = await repository.find_all(PageRequest(page=0, size=10))

        assert [t.name for t in page.content] == ["C", "A", "B"]
        assert page.total == 3
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_page_slices_and_counts_everything(self, db_session):
        repository = ThemaRepository(db_session)
        await seed(repository, "a", "b", "c", "d", "e")

        page = await repository.find_all(PageRequest(page=1, size=2))

        assert [t.name for t in page.content] == ["c", "d"]
        assert page.total == 5
        assert page.total_pages == 3
        assert page.has_next and page.has_previous

    @pytest.mark.asyncio
    async def test_sort_descending(self, db_session):
        repository = ThemaRepository(db_session)
        await seed(repository, "B", "C", "A")

        page = await repository.find_all(
            PageRequest(page=0, size=10, sort=[SortOrder(property="name", direction=Direction.DESC)])
        )

        assert [t.name for t in page.content] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_unknown_sort_property_rejected(self, db_session):
        with pytest.raises(ValidationError, match="unknown property"):
            await ThemaRepository(db_session).find_all(
                PageRequest(sort=[SortOrder(property="password")])
            )

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, db_session):
        repository = ThemaRepository(db_session)
        await seed(repository, "A")

        page = await repository.find_all(PageRequest(page=5, size=10))

        assert page.content == []
        assert page.total == 1


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_existing(self, db_session):
        repository = ThemaRepository(db_session)
        (thema,) = await seed(repository, "A")

        await repository.delete_by_id(thema.id)

        assert await repository.exists_by_id(thema.id) is False

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, db_session):
        await ThemaRepository(db_session).delete_by_id(12345)
