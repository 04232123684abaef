"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    db_instance,
    directory_instance,
    config,
    logger=None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        db_instance: Storage instance
        directory_instance: ShortLinkDirectory instance
        config: Configuration instance
        logger: Optional logger for request logging
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Link Directory",
        description="Create, resolve, update and expire short links",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    
    # Store instances in app state for access in routes
    app.state.db = db_instance
    app.state.directory = directory_instance
    app.state.config = config
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware, logger=logger)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
