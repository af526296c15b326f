import asyncio
import os
import stat
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app
from models.media import AudioUrlResult, MetadataResult
from services.cache import TTLCache
from services.media_service import MediaService
from services.single_flight import SingleFlight


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def advance(self, seconds: float):
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class FakeExtractor:
    """Stands in for YtDlpExtractor and records every call"""

    def __init__(self):
        self.audio_url = "https://media.example/videoplayback?id=abc&mime=audio%2Fwebm"
        self.metadata = MetadataResult.from_extractor({"title": "T", "uploader": "U", "duration": 200})
        self.error = None
        self.delay = 0.0
        self.calls = []

    async def get_audio_url(self, video_id, quality="bestaudio"):
        self.calls.append(("audio", video_id, quality))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return AudioUrlResult(url=self.audio_url) if self.audio_url else None

    async def get_metadata(self, video_id):
        self.calls.append(("metadata", video_id))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.metadata


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=1800, clock=clock)


@pytest.fixture
def media_service(extractor, cache):
    return MediaService(extractor=extractor, cache=cache, single_flight=SingleFlight())


@pytest.fixture
def app(media_service):
    test_settings = Settings(LOG_TO_FILE=False, DEBUG=False)
    return create_app(settings=test_settings, media_service=media_service)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_script(tmp_path):
    """Write an executable shell script that plays the part of yt-dlp"""

    def _make(body: str, name: str = "fake-yt-dlp", executable: bool = True) -> Path:
        script = tmp_path / name
        script.write_text("#!/bin/sh\n" + body + "\n")
        if executable:
            script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        else:
            script.chmod(0o644)
        return script

    return _make


def read_args(script: Path):
    """Arguments recorded by a script that ran ``record_args``"""
    args_file = script.parent / "args.txt"
    return args_file.read_text().splitlines() if os.path.exists(args_file) else []


# Shell snippet: append each argument on its own line to args.txt beside the script
RECORD_ARGS = 'for a in "$@"; do printf "%s\\n" "$a" >> "$(dirname "$0")/args.txt"; done'
