# middleware/request_logger.py - REQUEST LOGGING MIDDLEWARE

from fastapi import Request
from config.logging_config import logger
import time


def get_client_ip(request: Request) -> str:
    """Client IP, honouring X-Forwarded-For when behind a proxy"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def request_logger_middleware(request: Request, call_next):
    """
    Log every request with its status and duration

    Registered in main.py with @app.middleware("http").
    """
    start_time = time.time()

    logger.info(f"➡️  {request.method} {request.url.path} | IP: {get_client_ip(request)}")

    if request.query_params:
        logger.debug(f"Query Params: {dict(request.query_params)}")

    try:
        response = await call_next(request)
    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"❌ Request failed: {request.method} {request.url.path} | "
            f"Error: {str(e)} | Duration: {duration:.3f}s"
        )
        raise

    duration = time.time() - start_time
    status_code = response.status_code

    if status_code < 300:
        log_func, emoji = logger.info, "✅"
    elif status_code < 400:
        log_func, emoji = logger.info, "↩️ "
    elif status_code < 500:
        log_func, emoji = logger.warning, "⚠️ "
    else:
        log_func, emoji = logger.error, "❌"

    log_func(
        f"{emoji} {request.method} {request.url.path} | "
        f"Status: {status_code} | "
        f"Duration: {duration:.3f}s"
    )

    return response
