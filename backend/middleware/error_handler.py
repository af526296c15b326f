# middleware/error_handler.py - ERROR HANDLERS

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import traceback

from config.logging_config import logger


# ============================================================================
# GLOBAL ERROR HANDLER MIDDLEWARE
# ============================================================================

async def error_handler_middleware(request: Request, call_next):
    """
    Global error handler middleware
    Catches all unhandled exceptions and returns a generic JSON 500.
    Runs inside CORS, so the error response still carries CORS headers.
    """
    start_time = time.time()

    try:
        return await call_next(request)

    except Exception as e:
        process_time = time.time() - start_time

        logger.critical(
            f"❌ Unhandled error | "
            f"Path: {request.url.path} | "
            f"Method: {request.method} | "
            f"Error: {e!r} | "
            f"Process time: {process_time:.3f}s"
        )
        logger.critical(traceback.format_exc())

        # No detail reaches the client
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Internal server error",
            }
        )


# ============================================================================
# HTTP EXCEPTION HANDLER
# ============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes (404) and unregistered methods (405) both answer 404"""
    logger.info(f"404 Not Found: {request.method} {request.url.path} ({exc.status_code})")

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "success": False,
            "error": "Endpoint not found",
        }
    )


# ============================================================================
# REGISTER ERROR HANDLERS
# ============================================================================

def register_error_handlers(app):
    """
    Register the routing fallback and the catch-all middleware

    Call before adding any other middleware so the catch-all is the innermost
    layer and every other middleware (CORS included) wraps its 500 response.

    Usage:
        from middleware.error_handler import register_error_handlers

        app = FastAPI()
        register_error_handlers(app)
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(error_handler_middleware)

    logger.info("✅ Error handlers registered")
