"""
Info API — Thema REST Resource
===============================

What:  CRUD endpoints for Thema under {api_prefix}/themas.
How:   ThemaResource holds the per-operation logic: id rules, one repository
       call, response mapping. Thin endpoint functions resolve dependencies
       and delegate to it. register_routes() binds them to the router
       explicitly.

Route Inventory:
    POST   /themas        create          → 201 + Location
    PUT    /themas/{id}   full update     → 200
    PATCH  /themas/{id}   merge-patch     → 200 | 404
    GET    /themas        paged list      → 200 + X-Total-Count + Link
    GET    /themas/{id}   single entity   → 200 | 404 (empty body)
    DELETE /themas/{id}   delete          → 204

Id Rules (checked before any write):
    create:        payload id must be absent           else 400 idexists
    update/patch:  payload id must be present          else 400 idnull
                   payload id must equal the path id   else 400 idinvalid
                   the entity must exist               else 400 idnotfound

Transactions:
    Each request runs in one session from get_db_session, so the existence
    check and the save of an update commit or roll back together. Writers
    commit through the repository before the response is built; a failed
    commit surfaces as a 500 and nothing is persisted.

Identifiers:
    Path and body ids are bounded to the BIGINT range and displaycount to
    the INTEGER range; values outside fail validation with 422.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import URL

from info_api.config import settings
from info_api.database import get_db_session
from info_api.exceptions import BadRequestAlertError, NotFoundError, UnsupportedMediaTypeError
from info_api.models.thema import Thema
from info_api.repositories.thema_repository import ThemaRepository
from info_api.schemas.common import INT64_MAX, INT64_MIN, ErrorResponse, PageRequest
from info_api.schemas.thema import ThemaDTO
from info_api.utils.header_util import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from info_api.utils.pagination import generate_pagination_headers, get_page_request

logger = logging.getLogger(__name__)

ENTITY_NAME = "thema"
MERGE_PATCH_JSON = "application/merge-patch+json"
MUTABLE_FIELDS = ("name", "rechte", "displaycount")

ThemaId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX, description="Thema id")]


def _to_body(thema: Thema) -> dict:
    return ThemaDTO.model_validate(thema).model_dump(mode="json")


class ThemaResource:
    """
    Request handler for Thema.

    Holds only its collaborators; safe to share between concurrent requests.
    Every method either returns a complete response or raises an
    InfoApiError for the global handlers to render.
    """

    def __init__(
        self,
        thema_repository: ThemaRepository,
        application_name: str = settings.application_name,
        api_prefix: str = settings.api_prefix,
    ):
        self.thema_repository = thema_repository
        self.application_name = application_name
        self.api_prefix = api_prefix

    async def create(self, thema: ThemaDTO) -> JSONResponse:
        """
        Persist a new Thema.

        Returns:
            201 with Location {api_prefix}/themas/{id} and the stored entity

        Raises:
            BadRequestAlertError: idexists, if the payload carries an id
        """
        logger.debug("REST request to save Thema : %s", thema)
        if thema.id is not None:
            raise BadRequestAlertError("A new thema cannot already have an ID", ENTITY_NAME, "idexists")

        result = await self.thema_repository.save(
            Thema(name=thema.name, rechte=thema.rechte, displaycount=thema.displaycount)
        )
        await self.thema_repository.commit()
        headers = {
            "Location": f"{self.api_prefix}/themas/{result.id}",
            **create_entity_creation_alert(self.application_name, ENTITY_NAME, str(result.id)),
        }
        return JSONResponse(status_code=201, content=_to_body(result), headers=headers)

    async def update(self, thema_id: int, thema: ThemaDTO) -> JSONResponse:
        """
        Replace all mutable fields of an existing Thema.

        Fields missing from the payload are stored as null: PUT is a full
        replacement, not a merge.
        """
        logger.debug("REST request to update Thema : %s, %s", thema_id, thema)
        await self._check_updatable(thema_id, thema)

        result = await self.thema_repository.save(
            Thema(
                id=thema.id,
                name=thema.name,
                rechte=thema.rechte,
                displaycount=thema.displaycount,
            )
        )
        await self.thema_repository.commit()
        return JSONResponse(
            content=_to_body(result),
            headers=create_entity_update_alert(self.application_name, ENTITY_NAME, str(thema.id)),
        )

    async def partial_update(self, thema_id: int, thema: ThemaDTO) -> JSONResponse:
        """
        Merge the fields present in the payload into the stored Thema.

        Merge rules (RFC 7396):
            field absent   → stored value kept
            field = value  → overwritten
            field = null   → cleared

        Raises:
            BadRequestAlertError: idnull / idinvalid / idnotfound
            NotFoundError: the row vanished between the existence check and the load
        """
        logger.debug("REST request to partial update Thema partially : %s, %s", thema_id, thema)
        await self._check_updatable(thema_id, thema)

        existing = await self.thema_repository.find_by_id(thema.id)
        if existing is None:
            raise NotFoundError(resource=ENTITY_NAME, resource_id=str(thema.id))

        for field in MUTABLE_FIELDS:
            if field in thema.model_fields_set:
                setattr(existing, field, getattr(thema, field))

        result = await self.thema_repository.save(existing)
        await self.thema_repository.commit()
        return JSONResponse(
            content=_to_body(result),
            headers=create_entity_update_alert(self.application_name, ENTITY_NAME, str(thema.id)),
        )

    async def list(self, page_request: PageRequest, url: URL) -> JSONResponse:
        """One page of Themas as a JSON array; paging metadata goes in headers."""
        logger.debug("REST request to get a page of Themas")
        page = await self.thema_repository.find_all(page_request)
        return JSONResponse(
            content=[_to_body(thema) for thema in page.content],
            headers=generate_pagination_headers(url, page),
        )

    async def get(self, thema_id: int) -> JSONResponse:
        logger.debug("REST request to get Thema : %s", thema_id)
        thema = await self.thema_repository.find_by_id(thema_id)
        if thema is None:
            raise NotFoundError(resource=ENTITY_NAME, resource_id=str(thema_id))
        return JSONResponse(content=_to_body(thema))

    async def delete(self, thema_id: int) -> Response:
        """Delete by id. Deleting an id that does not exist still answers 204."""
        logger.debug("REST request to delete Thema : %s", thema_id)
        await self.thema_repository.delete_by_id(thema_id)
        await self.thema_repository.commit()
        return Response(
            status_code=204,
            headers=create_entity_deletion_alert(self.application_name, ENTITY_NAME, str(thema_id)),
        )

    async def _check_updatable(self, thema_id: int, thema: ThemaDTO) -> None:
        if thema.id is None:
            raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")
        if thema.id != thema_id:
            raise BadRequestAlertError("Invalid ID", ENTITY_NAME, "idinvalid")
        if not await self.thema_repository.exists_by_id(thema_id):
            raise BadRequestAlertError("Entity not found", ENTITY_NAME, "idnotfound")


# ══════════════════════════════════════════════════════════════════════════
# Dependencies
# ══════════════════════════════════════════════════════════════════════════


async def get_thema_repository(db: AsyncSession = Depends(get_db_session)) -> ThemaRepository:
    return ThemaRepository(db)


async def get_thema_resource(
    thema_repository: ThemaRepository = Depends(get_thema_repository),
) -> ThemaResource:
    return ThemaResource(thema_repository)


async def require_merge_patch(request: Request) -> None:
    """Reject PATCH bodies that are not application/merge-patch+json (415)."""
    content_type = request.headers.get("content-type")
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type != MERGE_PATCH_JSON:
        raise UnsupportedMediaTypeError(content_type, MERGE_PATCH_JSON)


# ══════════════════════════════════════════════════════════════════════════
# Endpoints
# ══════════════════════════════════════════════════════════════════════════


async def create_thema(
    thema: ThemaDTO,
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.create(thema)


async def update_thema(
    id: ThemaId,
    thema: ThemaDTO,
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.update(id, thema)


async def partial_update_thema(
    id: ThemaId,
    thema: ThemaDTO,
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.partial_update(id, thema)


async def list_themas(
    request: Request,
    page_request: PageRequest = Depends(get_page_request),
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.list(page_request, request.url)


async def get_thema(
    id: ThemaId,
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.get(id)


async def delete_thema(
    id: ThemaId,
    resource: ThemaResource = Depends(get_thema_resource),
) -> Response:
    return await resource.delete(id)


# ══════════════════════════════════════════════════════════════════════════
# Route Registration
# ══════════════════════════════════════════════════════════════════════════


def register_routes(router: APIRouter) -> None:
    """Bind every Thema endpoint to `router` (paths relative to the API prefix)."""
    bad_request = {400: {"description": "Invalid identifier", "model": ErrorResponse}}
    not_found = {404: {"description": "Thema not found (empty body)"}}

    router.add_api_route(
        "/themas",
        create_thema,
        methods=["POST"],
        status_code=201,
        response_model=ThemaDTO,
        responses=bad_request,
        summary="Create a new thema",
    )
    router.add_api_route(
        "/themas/{id}",
        update_thema,
        methods=["PUT"],
        response_model=ThemaDTO,
        responses=bad_request,
        summary="Replace an existing thema",
    )
    router.add_api_route(
        "/themas/{id}",
        partial_update_thema,
        methods=["PATCH"],
        response_model=ThemaDTO,
        dependencies=[Depends(require_merge_patch)],
        responses={
            **bad_request,
            **not_found,
            415: {"description": "Body is not application/merge-patch+json", "model": ErrorResponse},
        },
        summary="Merge-patch an existing thema",
    )
    router.add_api_route(
        "/themas",
        list_themas,
        methods=["GET"],
        response_model=List[ThemaDTO],
        summary="Get a page of themas",
    )
    router.add_api_route(
        "/themas/{id}",
        get_thema,
        methods=["GET"],
        response_model=ThemaDTO,
        responses=not_found,
        summary="Get a thema by id",
    )
    router.add_api_route(
        "/themas/{id}",
        delete_thema,
        methods=["DELETE"],
        status_code=204,
        response_class=Response,
        summary="Delete a thema",
    )


router = APIRouter(tags=["Themas"])
register_routes(router)
