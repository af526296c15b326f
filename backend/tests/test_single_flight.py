import asyncio

import pytest

from core.exceptions import ExtractorExitError
from services.cache import TTLCache
from services.media_service import MediaService
from services.single_flight import SingleFlight


def test_concurrent_calls_share_one_run():
    flight = SingleFlight()
    runs = []

    async def work():
        runs.append(1)
        await asyncio.sleep(0.05)
        return "result"

    async def main():
        return await asyncio.gather(*(flight.do("key", work) for _ in range(5)))

    assert asyncio.run(main()) == ["result"] * 5
    assert len(runs) == 1
    assert len(flight) == 0


def test_different_keys_run_separately():
    flight = SingleFlight()
    runs = []

    async def work(name):
        runs.append(name)
        await asyncio.sleep(0.01)
        return name

    async def main():
        return await asyncio.gather(
            flight.do("a", lambda: work("a")),
            flight.do("b", lambda: work("b")),
        )

    assert asyncio.run(main()) == ["a", "b"]
    assert sorted(runs) == ["a", "b"]


def test_errors_reach_every_waiter_and_release_key():
    flight = SingleFlight()

    async def failing():
        await asyncio.sleep(0.01)
        raise ExtractorExitError(1, "boom")

    async def main():
        results = await asyncio.gather(
            flight.do("key", failing),
            flight.do("key", failing),
            return_exceptions=True,
        )
        return results, flight.in_flight("key")

    results, still_running = asyncio.run(main())

    assert all(isinstance(r, ExtractorExitError) for r in results)
    assert results[0] is results[1]
    assert still_running is False


def test_cancelled_waiter_does_not_cancel_shared_work():
    flight = SingleFlight()

    async def work():
        await asyncio.sleep(0.05)
        return "done"

    async def main():
        first = asyncio.ensure_future(flight.do("key", work))
        second = asyncio.ensure_future(flight.do("key", work))
        await asyncio.sleep(0.01)
        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first
        return await second

    assert asyncio.run(main()) == "done"


def test_media_service_coalesces_identical_misses(extractor, clock):
    extractor.delay = 0.05
    service = MediaService(extractor, TTLCache(1800, clock=clock), SingleFlight())

    async def main():
        return await asyncio.gather(
            service.get_audio_url("abc123", "bestaudio"),
            service.get_audio_url("abc123", "bestaudio"),
            service.get_audio_url("abc123", "worstaudio"),
        )

    results = asyncio.run(main())

    assert [cached for _, cached in results] == [False, False, False]
    assert extractor.calls == [
        ("audio", "abc123", "bestaudio"),
        ("audio", "abc123", "worstaudio"),
    ]


def test_media_service_without_single_flight_spawns_each_time(extractor, clock):
    extractor.delay = 0.05
    service = MediaService(extractor, TTLCache(1800, clock=clock))

    async def main():
        return await asyncio.gather(
            service.get_metadata("abc123"),
            service.get_metadata("abc123"),
        )

    asyncio.run(main())

    assert extractor.calls == [("metadata", "abc123")] * 2
