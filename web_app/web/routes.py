"""Public redirect routes."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from shortlink.errors import NoSuchEntryError, StorageError

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    directory = request.app.state.directory
    
    health = await directory.health_check()
    
    if health["overall"]:
        return {"status": "healthy"}
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{short_url}", include_in_schema=False)
async def redirect_to_url(request: Request, short_url: str):
    """Redirect to the original URL of an active short link."""
    directory = request.app.state.directory
    
    try:
        entry = await directory.resolve(short_url)
    except NoSuchEntryError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short URL '{short_url}' not found",
        )
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Storage error: {str(e)}",
        )
    
    return RedirectResponse(url=entry.original_url, status_code=status.HTTP_302_FOUND)
