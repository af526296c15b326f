# models/media.py - EXTRACTION REQUEST & RESULT MODELS

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# REQUEST
# ============================================================================

class Operation(str, Enum):
    AUDIO_URL = "audio_url"
    METADATA = "metadata"
    STREAM = "stream"


def build_cache_key(operation: Operation, video_id: str, quality: Optional[str] = None) -> str:
    """
    Derive the cache key for an extraction

    Args:
        operation: Requested operation
        video_id: Video identifier
        quality: Format selector (audio only)

    Returns:
        Cache key string

    Raises:
        ValueError: For operations that are never cached
    """
    if operation is Operation.AUDIO_URL:
        return f"audio_{video_id}_{quality}"
    if operation is Operation.METADATA:
        return f"metadata_{video_id}"
    raise ValueError(f"Operation '{operation.value}' is not cacheable")


class ExtractionRequest(BaseModel):
    """One extraction, built per incoming HTTP request"""

    model_config = ConfigDict(frozen=True)

    video_id: str = Field(min_length=1)
    operation: Operation
    quality: str = "bestaudio"

    @property
    def cacheable(self) -> bool:
        return self.operation is not Operation.STREAM

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.operation, self.video_id, self.quality)


# ============================================================================
# RESULTS
# ============================================================================

class AudioUrlResult(BaseModel):
    """Direct, time-limited media URL. Opaque: never parsed or rewritten."""

    model_config = ConfigDict(frozen=True)

    url: str


class FormatInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    format_id: Any = None
    ext: Any = None
    quality: Any = None
    filesize: Any = None


class MetadataResult(BaseModel):
    """
    Reduced view of the extractor's JSON document

    Only the fields below are kept, with their values exactly as the
    extractor reported them. Fields missing from the source document stay
    unset and are left out of the serialized output.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    uploader: Any = None
    duration: Any = None
    thumbnail: Any = None
    description: Any = None
    upload_date: Any = None
    view_count: Any = None
    like_count: Any = None
    formats: Optional[List[FormatInfo]] = None

    @classmethod
    def from_extractor(cls, document: Dict[str, Any]) -> "MetadataResult":
        """Project a raw ``--dump-json`` document"""
        if document.get("formats") is None:
            # null format list is reported the same as a missing one
            document = {k: v for k, v in document.items() if k != "formats"}
        return cls.model_validate(document)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
