# models/__init__.py - MODELS MODULE

"""
Data models for the Deezl backend

Pydantic models for extraction requests and the results returned by the
extractor. All models are exported for easy importing.
"""

from models.media import (
    AudioUrlResult,
    ExtractionRequest,
    FormatInfo,
    MetadataResult,
    Operation,
    build_cache_key,
)

__all__ = [
    "AudioUrlResult",
    "ExtractionRequest",
    "FormatInfo",
    "MetadataResult",
    "Operation",
    "build_cache_key",
]
