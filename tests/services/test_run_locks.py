"""Tests for per-run admission locks."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from tourdesk.services.errors import RunLockTimeout
from tourdesk.services.run_locks import LocalRunLock, RedisRunLock, run_lock_key

pytestmark = pytest.mark.asyncio

RUN_DATE = date(2024, 6, 1)


class FakeRedis:
    """Just enough of the redis client for SET NX locking."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.closed = False

    async def set(self, key, value, ex=None, nx=False):
        if nx and key in self.values:
            return None
        self.values[key] = value
        return True

    async def get(self, key):
        return self.values.get(key)

    async def delete(self, key):
        self.values.pop(key, None)

    async def aclose(self) -> None:
        self.closed = True


async def test_local_lock_serializes_same_run() -> None:
    lock = LocalRunLock(timeout=1.0)
    order: list[str] = []

    async def admit(name: str) -> None:
        async with lock.run_scope("jeep-1", RUN_DATE):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(admit("a"), admit("b"))

    assert order in (
        ["a-in", "a-out", "b-in", "b-out"],
        ["b-in", "b-out", "a-in", "a-out"],
    )
    assert not lock.is_locked("jeep-1", RUN_DATE)


async def test_local_lock_times_out() -> None:
    lock = LocalRunLock(timeout=0.05)

    async with lock.run_scope("jeep-1", RUN_DATE):
        assert lock.is_locked("jeep-1", RUN_DATE)
        with pytest.raises(RunLockTimeout):
            async with lock.run_scope("jeep-1", RUN_DATE):
                pass
        async with lock.run_scope("jeep-2", RUN_DATE):
            pass


async def test_redis_lock_releases_own_key() -> None:
    client = FakeRedis()
    lock = RedisRunLock(client, ttl=5, timeout=0.05, retry_delay=0.01)
    key = run_lock_key("jeep-1", RUN_DATE)

    async with lock.run_scope("jeep-1", RUN_DATE):
        assert key in client.values
        with pytest.raises(RunLockTimeout):
            async with lock.run_scope("jeep-1", RUN_DATE):
                pass

    assert key not in client.values
    await lock.close()
    assert client.closed


async def test_redis_lock_leaves_foreign_key() -> None:
    client = FakeRedis()
    lock = RedisRunLock(client, ttl=5, timeout=0.05)
    key = run_lock_key("jeep-1", RUN_DATE)

    async with lock.run_scope("jeep-1", RUN_DATE):
        client.values[key] = "someone-else"

    assert client.values[key] == "someone-else"
