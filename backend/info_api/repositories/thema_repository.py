"""Repository for the `thema` table."""

from info_api.models.thema import Thema
from info_api.repositories.base import AsyncRepository


class ThemaRepository(AsyncRepository[Thema]):
    model = Thema
