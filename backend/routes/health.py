# routes/health.py - HEALTH & INFO ROUTES

from datetime import datetime, timezone

from fastapi import APIRouter

from config.settings import settings

router = APIRouter(tags=["Health"])


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health")
async def health_check():
    """Liveness check"""
    return {"status": "OK", "timestamp": utc_timestamp()}


@router.get("/", tags=["Root"])
async def root():
    """Root endpoint - API information"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "timestamp": utc_timestamp(),
        "endpoints": {
            "health": "/health",
            "audio": "/api/audio/{videoId}?quality=<format>",
            "metadata": "/api/metadata/{videoId}",
            "stream": "/api/stream/{videoId}",
        },
    }
