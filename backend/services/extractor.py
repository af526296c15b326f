# services/extractor.py - YT-DLP SUBPROCESS INVOKER
import asyncio
import json
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from config.logging_config import get_logger
from core.exceptions import (
    ExtractorExitError,
    ExtractorParseError,
    ExtractorSpawnError,
    ExtractorTimeoutError,
)
from models.media import AudioUrlResult, MetadataResult

logger = get_logger("services.extractor")


@dataclass
class ProcessOutput:
    exit_code: int
    stdout: str
    stderr: str


# ============================================================================
# YT-DLP EXTRACTOR
# ============================================================================

class YtDlpExtractor:
    """
    Resolve audio URLs and metadata by running yt-dlp as a subprocess

    Every call spawns its own process from an argument vector (no shell) and
    waits for it without blocking the event loop. Calls never wait on each
    other.
    """

    def __init__(
        self,
        binary: str = None,
        timeout: float = None,
        watch_url_template: str = None
    ):
        self.binary = binary or settings.EXTRACTOR_BINARY
        self.timeout = timeout or settings.EXTRACTOR_TIMEOUT
        self.watch_url_template = watch_url_template or settings.WATCH_URL_TEMPLATE

    def watch_url(self, video_id: str) -> str:
        return self.watch_url_template.format(video_id=video_id)

    def audio_url_args(self, video_id: str, quality: str) -> List[str]:
        return [
            "--get-url",
            "--format", quality,
            "--no-playlist",
            "--no-warnings",
            self.watch_url(video_id),
        ]

    def metadata_args(self, video_id: str) -> List[str]:
        return [
            "--dump-json",
            "--no-playlist",
            "--no-warnings",
            self.watch_url(video_id),
        ]

    async def get_audio_url(self, video_id: str, quality: str = "bestaudio") -> Optional[AudioUrlResult]:
        """
        Resolve the direct media URL for a video

        Args:
            video_id: Video identifier
            quality: yt-dlp format selector

        Returns:
            The first URL printed by yt-dlp, or None when it printed nothing

        Raises:
            ExtractionError: On spawn failure, non-zero exit or timeout
        """
        logger.info(f"🎧 Extracting audio URL for video: {video_id} (format: {quality})")

        output = await self._run(self.audio_url_args(video_id, quality))
        text = output.stdout.strip()

        if not text:
            logger.warning(f"⚠️  yt-dlp returned no URL for {video_id}")
            return None

        # Merged selectors (e.g. "bestvideo+bestaudio") print one URL per line
        return AudioUrlResult(url=text.splitlines()[0].strip())

    async def get_metadata(self, video_id: str) -> Optional[MetadataResult]:
        """
        Fetch the metadata document for a video

        Args:
            video_id: Video identifier

        Returns:
            Projected metadata, or None when yt-dlp printed nothing

        Raises:
            ExtractorParseError: If stdout is not a JSON object or its format
                list is not a list of objects
            ExtractionError: On spawn failure, non-zero exit or timeout
        """
        logger.info(f"📊 Extracting metadata for video: {video_id}")

        output = await self._run(self.metadata_args(video_id))
        text = output.stdout.strip()

        if not text:
            logger.warning(f"⚠️  yt-dlp returned no metadata for {video_id}")
            return None

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Unparsable metadata for {video_id}: {e}")
            raise ExtractorParseError(str(e))

        if not isinstance(document, dict):
            raise ExtractorParseError(f"expected a JSON object, got {type(document).__name__}")

        try:
            return MetadataResult.from_extractor(document)
        except PydanticValidationError as e:
            logger.error(f"❌ Malformed format list for {video_id}: {e}")
            raise ExtractorParseError("formats is not a list of objects")

    # ========================================================================
    # PROCESS HANDLING
    # ========================================================================

    async def _run(self, args: List[str]) -> ProcessOutput:
        """Run the extractor and return its output if it exited with 0"""
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"❌ {self.binary} spawn error: {e}")
            raise ExtractorSpawnError(e.strerror or str(e), binary=self.binary)

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.error(f"❌ {self.binary} timed out after {self.timeout}s: {args[-1]}")
            raise ExtractorTimeoutError(self.timeout, binary=self.binary)
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        output = ProcessOutput(
            exit_code=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

        if output.exit_code != 0:
            logger.error(f"❌ {self.binary} error (code {output.exit_code}): {output.stderr.strip()}")
            raise ExtractorExitError(output.exit_code, output.stderr, binary=self.binary)

        return output

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()
