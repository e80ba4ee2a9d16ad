import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import RankingError, http_status_for
from app.routers import categories, ranking_items, full_course, initial_data
from app.schemas.common import OperationResponse

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.project_name,
    version="1.0.0",
)

# Include routers
app.include_router(initial_data.router, prefix=settings.api_v1_prefix)
app.include_router(categories.router, prefix=settings.api_v1_prefix)
app.include_router(ranking_items.router, prefix=settings.api_v1_prefix)
app.include_router(full_course.router, prefix=settings.api_v1_prefix)


@app.exception_handler(RankingError)
async def ranking_error_handler(request: Request, exc: RankingError):
    """Store/configuration failures raised outside a service result (plain reads, session setup)."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=http_status_for(exc),
        content={"detail": OperationResponse.from_error(exc).model_dump()},
    )


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Gourmet Ranking API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database_configured": bool(settings.database_url),
        "supabase_configured": bool(settings.supabase_url),
    }
