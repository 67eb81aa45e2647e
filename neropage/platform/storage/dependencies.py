from typing import AsyncGenerator

from neropage.platform.db import session as db_session
from neropage.platform.storage.base import Storage
from neropage.platform.storage.database import DatabaseStorage
from neropage.platform.storage.memory import MemoryStorage

# Backs the whole process when DATABASE_URL is empty
memory_storage = MemoryStorage()


async def get_storage() -> AsyncGenerator[Storage, None]:
    """Yields the configured storage backend for the lifetime of one request."""
    if db_session.SessionLocal is None:
        yield memory_storage
        return

    async with db_session.SessionLocal() as session:
        yield DatabaseStorage(session)
