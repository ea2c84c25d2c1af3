"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.db.session import get_session
from tourdesk.services.run_locks import AdmissionTransaction, get_admission_transaction


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_admission() -> AdmissionTransaction:
    """Return the process-wide admission guard."""
    return get_admission_transaction()
