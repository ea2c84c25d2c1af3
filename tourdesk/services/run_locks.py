"""Per-run admission scopes.

Admission reads a snapshot, checks it and writes a booking. Two staff members
doing that on the same (vehicle, date) at once could both see a free seat, so
the whole sequence runs inside ``AdmissionTransaction.run_scope``.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from datetime import date
from typing import Any, Protocol

import redis.asyncio as redis  # type: ignore[import-untyped]

from tourdesk.core.config import get_settings
from tourdesk.services.errors import RunLockTimeout

logger = logging.getLogger(__name__)


def run_lock_key(vehicle_id: str, run_date: date) -> str:
    return f"tourdesk:run-lock:{vehicle_id}:{run_date.isoformat()}"


class AdmissionTransaction(Protocol):
    """Serializes admission for one tour run."""

    def run_scope(
        self, vehicle_id: str, run_date: date
    ) -> AbstractAsyncContextManager[None]: ...


class LocalRunLock:
    """In-process lock per run; enough for a single worker."""

    def __init__(self, timeout: float = 5.0) -> None:
        self._timeout = timeout
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    def is_locked(self, vehicle_id: str, run_date: date) -> bool:
        lock = self._locks.get(run_lock_key(vehicle_id, run_date))
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def run_scope(self, vehicle_id: str, run_date: date) -> AsyncIterator[None]:
        key = run_lock_key(vehicle_id, run_date)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self._timeout)
            except asyncio.TimeoutError as exc:
                raise RunLockTimeout(
                    "Another booking is being saved for this jeep and date, please retry"
                ) from exc
            try:
                yield
            finally:
                lock.release()
        finally:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                self._waiters.pop(key, None)
                self._locks.pop(key, None)


class RedisRunLock:
    """Short-lived ``SET NX EX`` lock shared by every worker on a Redis."""

    def __init__(
        self,
        client: Any,
        *,
        ttl: int = 30,
        timeout: float = 5.0,
        retry_delay: float = 0.05,
    ) -> None:
        self._client = client
        self._ttl = ttl
        self._timeout = timeout
        self._retry_delay = retry_delay

    @asynccontextmanager
    async def run_scope(self, vehicle_id: str, run_date: date) -> AsyncIterator[None]:
        key = run_lock_key(vehicle_id, run_date)
        token = uuid.uuid4().hex
        started = time.monotonic()
        while not await self._client.set(key, token, ex=self._ttl, nx=True):
            if time.monotonic() - started > self._timeout:
                raise RunLockTimeout(
                    "Another booking is being saved for this jeep and date, please retry"
                )
            await asyncio.sleep(self._retry_delay)
        try:
            yield
        finally:
            # Only release a lock we still own; it may have expired meanwhile.
            if await self._client.get(key) == token:
                await self._client.delete(key)
            else:
                logger.warning("Run lock %s expired before release", key)

    async def close(self) -> None:
        await self._client.aclose()


_admission_transaction: AdmissionTransaction | None = None


def get_admission_transaction() -> AdmissionTransaction:
    """Return the process-wide admission scope provider.

    Redis is used when ``REDIS_URL`` is configured, otherwise a local lock.
    """
    global _admission_transaction
    if _admission_transaction is None:
        settings = get_settings()
        if settings.redis_url:
            client = redis.from_url(
                settings.redis_url, encoding="utf-8", decode_responses=True
            )
            _admission_transaction = RedisRunLock(
                client,
                ttl=settings.run_lock_ttl_seconds,
                timeout=settings.run_lock_timeout_seconds,
            )
        else:
            _admission_transaction = LocalRunLock(
                timeout=settings.run_lock_timeout_seconds
            )
    return _admission_transaction


async def close_admission_transaction() -> None:
    """Release connections held by the admission scope provider."""
    global _admission_transaction
    transaction = _admission_transaction
    _admission_transaction = None
    if isinstance(transaction, RedisRunLock):
        await transaction.close()


def set_admission_transaction(transaction: AdmissionTransaction | None) -> None:
    """Override (or reset) the admission scope provider."""
    global _admission_transaction
    _admission_transaction = transaction
