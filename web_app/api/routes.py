"""API routes implementation."""

from typing import Optional
from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, Query, status

from .schemas import (
    CreateLinkRequest,
    UpdateLinkRequest,
    LinkResponse,
    LinkListResponse,
    ExpireResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortlink.database.models import ShortLinkEntry, as_utc
from shortlink.errors import AliasTakenError, NoSuchEntryError, StorageError
from shortlink.expiry import expiry_cutoff
from shortlink.common.url_builder import build_short_link
from shortlink.common.headers import build_base_url, resolve_path_prefix

router = APIRouter()


def _to_response(request: Request, entry: ShortLinkEntry) -> LinkResponse:
    """Build the API representation of an entry, including its public link."""
    config = request.app.state.config
    headers = dict(request.headers)
    base_url = build_base_url(
        headers=headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return LinkResponse(
        id=entry.id,
        short_url=entry.short_url,
        short_link=build_short_link(
            short_url=entry.short_url,
            base_url=base_url,
            path_prefix=resolve_path_prefix(headers, config.path_prefix),
        ),
        original_url=entry.original_url,
        autogenerated=entry.autogenerated,
        active=entry.active,
        create_date=entry.create_date,
        modified_date=entry.modified_date,
    )


def _storage_unavailable(e: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Storage error: {str(e)}",
    )


@router.post(
    "/links",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short URL already exists"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
    summary="Create short link",
    description="Shorten a URL. Without short_url, an existing autogenerated link for the URL is reused.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    directory = request.app.state.directory

    try:
        if body.short_url:
            entry = await directory.create_explicit(body.url, body.short_url)
        else:
            entry = await directory.create_autogenerated(body.url)
    except AliasTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise _storage_unavailable(e)

    return _to_response(request, entry)


@router.get(
    "/links",
    response_model=LinkListResponse,
    summary="List short links",
    description="List autogenerated or explicit links in the index range [start, end).",
)
async def list_links(
    request: Request,
    autogenerated: bool = Query(True),
    start: int = Query(0, ge=0),
    end: Optional[int] = Query(None, ge=0),
):
    """List entries of one kind."""
    directory = request.app.state.directory

    try:
        entries = await directory.list_by_kind(autogenerated, start, end)
    except StorageError as e:
        raise _storage_unavailable(e)

    return LinkListResponse(
        autogenerated=autogenerated,
        start=start,
        end=end,
        items=[_to_response(request, entry) for entry in entries],
    )


@router.delete(
    "/links",
    response_model=ExpireResponse,
    summary="Expire stale links",
    description="Delete every link not modified since older_than (defaults to the configured retention).",
)
async def expire_links(request: Request, older_than: Optional[datetime] = Query(None)):
    """Run the expiry sweep."""
    directory = request.app.state.directory
    config = request.app.state.config

    if older_than is None:
        older_than = expiry_cutoff(directory.clock(), config.retention_days)
    else:
        older_than = as_utc(older_than)

    deleted = await directory.expire_older_than(older_than)
    return ExpireResponse(older_than=older_than, deleted=deleted)


@router.get(
    "/links/id/{entry_id}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
    summary="Get link by id",
)
async def get_link(request: Request, entry_id: int):
    """Get an entry by id, active or not."""
    directory = request.app.state.directory

    try:
        entry = await directory.get_entry(entry_id)
    except NoSuchEntryError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise _storage_unavailable(e)

    return _to_response(request, entry)


@router.get(
    "/links/{short_url}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Short URL not found"}},
    summary="Resolve short URL",
    description="Get the active link for a short URL.",
)
async def resolve_link(request: Request, short_url: str):
    """Resolve a short URL."""
    directory = request.app.state.directory

    try:
        entry = await directory.resolve(short_url)
    except NoSuchEntryError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise _storage_unavailable(e)

    return _to_response(request, entry)


@router.put(
    "/links/{entry_id}",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
        409: {"model": ErrorResponse, "description": "Short URL already exists"},
    },
    summary="Update link",
)
async def update_link(request: Request, entry_id: int, body: UpdateLinkRequest):
    """Update an entry's original URL, short URL and active flag."""
    directory = request.app.state.directory

    try:
        entry = await directory.update_entry(entry_id, body.url, body.short_url, body.active)
    except NoSuchEntryError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AliasTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        raise _storage_unavailable(e)

    return _to_response(request, entry)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get entry counts.",
)
async def get_statistics(request: Request):
    """Get directory statistics."""
    directory = request.app.state.directory
    config = request.app.state.config

    try:
        stats = await directory.get_statistics()
    except StorageError as e:
        raise _storage_unavailable(e)

    return StatisticsResponse(**stats, database=config.database_url.split("://", 1)[0])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    directory = request.app.state.directory

    health = await directory.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
