# services/media_service.py - CACHE + EXTRACTOR ORCHESTRATION
from typing import Optional, Tuple

from config.logging_config import get_logger
from models.media import AudioUrlResult, ExtractionRequest, MetadataResult, Operation
from services.cache import TTLCache
from services.extractor import YtDlpExtractor
from services.single_flight import SingleFlight

logger = get_logger("services.media")


class MediaService:
    """
    Resolve audio URLs and metadata through the cache

    Successful results are cached under the request's cache key; failures
    propagate to the caller and are never stored. Stream resolution skips
    the cache entirely.
    """

    def __init__(
        self,
        extractor: YtDlpExtractor,
        cache: TTLCache,
        single_flight: Optional[SingleFlight] = None
    ):
        self.extractor = extractor
        self.cache = cache
        self.single_flight = single_flight

    async def get_audio_url(self, video_id: str, quality: str) -> Tuple[Optional[AudioUrlResult], bool]:
        """
        Get the direct audio URL for a video

        Returns:
            (result or None, cached flag)
        """
        request = ExtractionRequest(video_id=video_id, operation=Operation.AUDIO_URL, quality=quality)

        cached_result = self.cache.get(request.cache_key)
        if cached_result is not None:
            logger.debug(f"💾 Cache hit: {request.cache_key}")
            return cached_result, True

        result = await self._coalesce(
            request.cache_key,
            lambda: self.extractor.get_audio_url(video_id, quality)
        )

        if result is not None:
            self.cache.set(request.cache_key, result)

        return result, False

    async def get_metadata(self, video_id: str) -> Tuple[Optional[MetadataResult], bool]:
        """
        Get projected metadata for a video

        Returns:
            (metadata or None, cached flag)
        """
        request = ExtractionRequest(video_id=video_id, operation=Operation.METADATA)

        cached_metadata = self.cache.get(request.cache_key)
        if cached_metadata is not None:
            logger.debug(f"💾 Cache hit: {request.cache_key}")
            return cached_metadata, True

        metadata = await self._coalesce(
            request.cache_key,
            lambda: self.extractor.get_metadata(video_id)
        )

        if metadata is not None:
            self.cache.set(request.cache_key, metadata)

        return metadata, False

    async def resolve_stream(self, video_id: str) -> Optional[AudioUrlResult]:
        """Resolve a fresh best-audio URL; never read from or written to the cache"""
        request = ExtractionRequest(video_id=video_id, operation=Operation.STREAM)
        return await self.extractor.get_audio_url(request.video_id, request.quality)

    async def _coalesce(self, key, fn):
        if self.single_flight is None:
            return await fn()
        return await self.single_flight.do(key, fn)
