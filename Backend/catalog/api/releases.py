import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog.core.exceptions import NotFoundException
from catalog.schemas.list_params import ListParams
from catalog.schemas.resources import RELEASES, RELEASE_INCLUDES, catalog_projector
from catalog.services.attachments import AttachmentUrlResolver, get_attachment_resolver
from catalog.services.jsonapi import JSONAPI_CONTENT_TYPE, error_document
from catalog.services.list_service import ListService, get_list_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _first_present(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value not in (None, ""):
            return value
    return None


def jsonapi_response(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, media_type=JSONAPI_CONTENT_TYPE)


# Parameters are taken as raw strings: malformed values fall back to
# defaults in the service instead of failing validation.
@router.get("/releases")
async def list_releases(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    per_page: Optional[str] = None,
    search: Optional[str] = None,
    q: Optional[str] = None,
    past: Optional[str] = None,
    service: ListService = Depends(get_list_service),
    attachment_url: AttachmentUrlResolver = Depends(get_attachment_resolver),
) -> JSONResponse:
    """List releases as a paginated JSON:API document with albums and artists included"""
    params = ListParams(
        page=page,
        limit=_first_present(limit, per_page),
        past=past,
        search=_first_present(search, q),
    )
    result = await service.list_releases(params)

    document = catalog_projector(attachment_url).project(
        RELEASES,
        result.items,
        meta=result.meta,
        base_url=str(request.url.replace(query="")),
        params=request.query_params,
        include=RELEASE_INCLUDES,
    )
    return jsonapi_response(document)


@router.get("/releases/{release_id}")
async def read_release(
    release_id: int,
    service: ListService = Depends(get_list_service),
    attachment_url: AttachmentUrlResolver = Depends(get_attachment_resolver),
) -> JSONResponse:
    """Get a single release with its album and artists included"""
    try:
        release = await service.get_release(release_id)
    except NotFoundException as e:
        logger.warning(f"Release with ID {release_id} not found")
        return jsonapi_response(error_document(e.status_code, "Not Found", e.detail), status_code=e.status_code)

    document = catalog_projector(attachment_url).project_one(RELEASES, release, include=RELEASE_INCLUDES)
    return jsonapi_response(document)
