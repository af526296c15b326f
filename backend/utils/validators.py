# utils/validators.py - INPUT VALIDATORS
import re
from typing import Optional

from config.settings import settings
from config.logging_config import logger
from core.exceptions import ValidationError


VIDEO_ID_PATTERN = re.compile(r'[A-Za-z0-9_-]+')

# yt-dlp format selectors: ids, names, filters, merges and fallbacks,
# e.g. "140", "bestaudio[ext=m4a]/bestaudio", "bv*+ba/b"
QUALITY_PATTERN = re.compile(r'[A-Za-z0-9_.,:+/*!?^$~=<>\[\]()-]+')
QUALITY_MAX_LENGTH = 200


# ============================================================================
# ID VALIDATORS
# ============================================================================

def validate_video_id(video_id: str, max_length: Optional[int] = None) -> str:
    """
    Validate a video ID before it is put into the watch URL

    Args:
        video_id: Video ID to validate
        max_length: Maximum accepted length

    Returns:
        Validated video ID

    Raises:
        ValidationError: If video ID is invalid
    """
    max_length = max_length or settings.VIDEO_ID_MAX_LENGTH

    if not video_id:
        raise ValidationError("Video ID is required")

    if len(video_id) > max_length or not VIDEO_ID_PATTERN.fullmatch(video_id):
        logger.debug(f"Rejected video ID: {video_id[:80]!r}")
        raise ValidationError("Invalid video ID")

    return video_id


# ============================================================================
# FORMAT VALIDATORS
# ============================================================================

def validate_quality(quality: Optional[str], default: Optional[str] = None) -> str:
    """
    Validate a yt-dlp format selector

    Args:
        quality: Format selector from the query string
        default: Value used when quality is missing or empty

    Returns:
        Validated selector

    Raises:
        ValidationError: If the selector could be read as an option or has
            characters outside the selector grammar
    """
    if not quality:
        return default or settings.DEFAULT_QUALITY

    if (
        len(quality) > QUALITY_MAX_LENGTH
        or quality.startswith("-")
        or not QUALITY_PATTERN.fullmatch(quality)
    ):
        raise ValidationError("Invalid quality selector")

    return quality
