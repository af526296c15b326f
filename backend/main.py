# main.py - FASTAPI APPLICATION

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from datetime import datetime, timezone
from typing import Optional
import time
import uvicorn

# Configuration and Setup
from config.settings import Settings, settings as default_settings
from config.logging_config import logger

from routes import health, media

from middleware.error_handler import register_error_handlers
from middleware.request_logger import request_logger_middleware

from services.cache import TTLCache
from services.extractor import YtDlpExtractor
from services.media_service import MediaService
from services.single_flight import SingleFlight


# ============================================================================
# SERVICE WIRING
# ============================================================================

def build_media_service(settings: Settings) -> MediaService:
    """Create the extractor, cache and coalescer for one application instance"""
    extractor = YtDlpExtractor(
        binary=settings.EXTRACTOR_BINARY,
        timeout=settings.EXTRACTOR_TIMEOUT,
        watch_url_template=settings.WATCH_URL_TEMPLATE
    )
    cache = TTLCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    single_flight = SingleFlight() if settings.SINGLE_FLIGHT_ENABLED else None

    return MediaService(extractor=extractor, cache=cache, single_flight=single_flight)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def create_app(
    settings: Optional[Settings] = None,
    media_service: Optional[MediaService] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Settings to use (default: global settings)
        media_service: Pre-built service, e.g. with a fake extractor in tests

    Returns:
        Configured FastAPI app
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ========== STARTUP ==========
        logger.info("=" * 80)
        logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"⏰ Startup Time: {datetime.now(timezone.utc).isoformat()}")

        if settings.validate():
            logger.info("✅ Configuration validated")
        else:
            logger.warning("⚠️  Configuration has errors - extraction requests will fail")

        logger.info(f"  📍 Server: {settings.HOST}:{settings.PORT}")
        logger.info(f"  🎧 Extractor: {settings.EXTRACTOR_BINARY} (timeout {settings.EXTRACTOR_TIMEOUT}s)")
        logger.info(f"  💾 Cache TTL: {settings.CACHE_TTL_SECONDS}s")
        logger.info(f"  🔀 Single-flight: {'enabled' if settings.SINGLE_FLIGHT_ENABLED else 'disabled'}")
        logger.info(f"  🌐 CORS Origins: {settings.allowed_origins_list}")
        logger.info("=" * 80)

        yield

        # ========== SHUTDOWN ==========
        logger.info("🛑 Shutting down application...")
        app.state.media_service.cache.clear()
        logger.info("✅ Cache cleared")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Resolves video IDs into playable audio URLs and metadata using yt-dlp",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
    )

    app.state.settings = settings
    app.state.media_service = media_service or build_media_service(settings)

    # ========================================================================
    # ERROR HANDLERS (innermost middleware, registered first)
    # ========================================================================

    register_error_handlers(app)

    # ========================================================================
    # MIDDLEWARE
    # ========================================================================

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Request logging middleware"""
        return await request_logger_middleware(request, call_next)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add X-Process-Time header to all responses"""
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(round(time.time() - start_time, 4))
        return response

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        """Add security headers to all responses (no CSP / COEP: media is cross-origin)"""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["X-DNS-Prefetch-Control"] = "off"

        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response

    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    # Added last so it wraps everything, including error responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # ========================================================================
    # ROUTERS
    # ========================================================================

    app.include_router(health.router)
    app.include_router(media.router)

    return app


app = create_app()


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    logger.info(f"🎵 {default_settings.APP_NAME} backend running on port {default_settings.PORT}")
    logger.info(f"🔗 Health check: http://localhost:{default_settings.PORT}/health")
    logger.info(f"🎧 Audio API: http://localhost:{default_settings.PORT}/api/audio/:videoId")
    logger.info(f"📊 Metadata API: http://localhost:{default_settings.PORT}/api/metadata/:videoId")

    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level="info" if default_settings.DEBUG else "warning",
        access_log=default_settings.DEBUG,
        workers=1
    )
