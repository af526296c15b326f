# routes/media.py - AUDIO / METADATA / STREAM ROUTES

from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from config.logging_config import get_logger
from core.exceptions import ExtractionError, ValidationError
from core.responses import (
    error_response,
    not_found_response,
    redirect_response,
    stream_error_response,
    success_response,
)
from services.media_service import MediaService
from utils.validators import validate_quality, validate_video_id

logger = get_logger("routes.media")

router = APIRouter(prefix="/api", tags=["Media"])


def get_media_service(request: Request) -> MediaService:
    """Media service built at startup (see main.lifespan)"""
    return request.app.state.media_service


# ============================================================================
# AUDIO URL
# ============================================================================

@router.get("/audio/{video_id}")
async def get_audio_url(
    video_id: str,
    quality: Optional[str] = Query(None, description="yt-dlp format selector"),
    service: MediaService = Depends(get_media_service)
):
    """
    Resolve a direct audio URL for a video
    """
    try:
        video_id = validate_video_id(video_id)
        quality = validate_quality(quality)

        result, cached = await service.get_audio_url(video_id, quality)

        if result is None:
            return not_found_response("Audio URL not found", video_id)

        return success_response(video_id, cached, audioUrl=result.url)

    except ValidationError as e:
        return error_response(e.message, e.status_code, video_id)
    except ExtractionError as e:
        logger.error(f"❌ Audio extraction error for {video_id}: {e.message} {e.details or ''}")
        return error_response(e.message, e.status_code, video_id)


# ============================================================================
# METADATA
# ============================================================================

@router.get("/metadata/{video_id}")
async def get_metadata(
    video_id: str,
    service: MediaService = Depends(get_media_service)
):
    """
    Fetch title, uploader, duration, formats... for a video
    """
    try:
        video_id = validate_video_id(video_id)

        metadata, cached = await service.get_metadata(video_id)

        if metadata is None:
            return not_found_response("Metadata not found", video_id)

        return success_response(video_id, cached, metadata=metadata.to_response())

    except ValidationError as e:
        return error_response(e.message, e.status_code, video_id)
    except ExtractionError as e:
        logger.error(f"❌ Metadata extraction error for {video_id}: {e.message} {e.details or ''}")
        return error_response(e.message, e.status_code, video_id)


# ============================================================================
# STREAM REDIRECT
# ============================================================================

@router.get("/stream/{video_id}")
async def stream_audio(
    video_id: str,
    service: MediaService = Depends(get_media_service)
):
    """
    Redirect to a freshly resolved best-audio URL (never cached)
    """
    try:
        video_id = validate_video_id(video_id)

        result = await service.resolve_stream(video_id)

        if result is None:
            return stream_error_response("Audio stream not found", 404)

        return redirect_response(result.url)

    except ValidationError as e:
        return stream_error_response(e.message, e.status_code)
    except ExtractionError as e:
        logger.error(f"❌ Stream error for {video_id}: {e.message} {e.details or ''}")
        return stream_error_response(e.message, e.status_code)
