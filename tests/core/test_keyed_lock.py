"""
Test suite for KeyedLock.

Verifies same-key serialisation, cross-key parallelism and registry cleanup.

System role: Verification of per-job mutual exclusion
"""

import asyncio

import pytest

from docman.core.keyed_lock import KeyedLock


async def _tracked(locks: KeyedLock, key, active: dict, peaks: dict) -> None:
    async with locks.hold(key):
        active[key] = active.get(key, 0) + 1
        peaks[key] = max(peaks.get(key, 0), active[key])
        await asyncio.sleep(0.01)
        active[key] -= 1


class TestKeyedLock:
    """Test suite for KeyedLock.hold()."""

    @pytest.mark.asyncio
    async def test_same_key_is_serialised(self) -> None:
        locks = KeyedLock()
        active: dict = {}
        peaks: dict = {}

        await asyncio.gather(*(_tracked(locks, "job-1", active, peaks) for _ in range(5)))

        assert peaks["job-1"] == 1

    @pytest.mark.asyncio
    async def test_different_keys_run_in_parallel(self) -> None:
        locks = KeyedLock()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def holder() -> None:
            async with locks.hold("job-1"):
                inside.set()
                await release.wait()

        task = asyncio.create_task(holder())
        await inside.wait()

        # Another key is not blocked by job-1
        async with locks.hold("job-2"):
            assert locks.locked("job-1")

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_registry_drops_idle_locks(self) -> None:
        locks = KeyedLock()

        async with locks.hold("job-1"):
            assert len(locks) == 1

        assert len(locks) == 0
        assert not locks.locked("job-1")

    @pytest.mark.asyncio
    async def test_lock_released_when_block_raises(self) -> None:
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("job-1"):
                raise RuntimeError("boom")

        assert len(locks) == 0
        async with locks.hold("job-1"):
            pass
