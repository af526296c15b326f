# core/responses.py - RESPONSE SHAPES
from fastapi.responses import JSONResponse, Response
from typing import Any, Optional


# ============================================================================
# RESPONSE FUNCTIONS
# ============================================================================

def success_response(
    video_id: str,
    cached: bool,
    **payload: Any
) -> JSONResponse:
    """
    Standard success response for a resolved video

    Args:
        video_id: Requested video ID
        cached: Whether the result came from the cache
        **payload: Result fields (e.g. audioUrl=..., metadata=...)

    Returns:
        JSONResponse with success format

    Example:
        return success_response("dQw4w9WgXcQ", False, audioUrl=result.url)
    """
    content = {"success": True}
    content.update(payload)
    content["cached"] = cached
    content["videoId"] = video_id
    return JSONResponse(content=content, status_code=200)


def error_response(
    error: str,
    status_code: int = 500,
    video_id: Optional[str] = None
) -> JSONResponse:
    """
    Standard error response

    Args:
        error: Message shown to the client
        status_code: HTTP status code (default: 500)
        video_id: Requested video ID, echoed back when known

    Returns:
        JSONResponse with error format
    """
    content = {
        "success": False,
        "error": error,
    }

    if video_id is not None:
        content["videoId"] = video_id

    return JSONResponse(content=content, status_code=status_code)


def not_found_response(error: str, video_id: str) -> JSONResponse:
    """Extractor ran but produced nothing usable (404)"""
    return error_response(error, status_code=404, video_id=video_id)


def stream_error_response(error: str, status_code: int = 500) -> JSONResponse:
    """Error body used by the stream endpoint: just the message"""
    return JSONResponse(content={"error": error}, status_code=status_code)


def redirect_response(url: str) -> Response:
    """
    Temporary redirect (302) to a resolved media URL

    The Location header carries the URL exactly as the extractor printed it.
    """
    return Response(status_code=302, headers={"location": url})
