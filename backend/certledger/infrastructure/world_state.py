"""World State Adapter: SQLAlchemy-backed ledger with one transaction per operation.

Invariants:
    - SqlWorldState satisfies core.ledger_protocols.LedgerStub
    - Every transaction() scope commits on success and rolls back on any exception
      (a failed put leaves no observable mutation)
    - SQLAlchemy exceptions never escape: puts map to LedgerWriteError, queries to
      LedgerQueryError, point reads to LedgerUnavailableError
    - Query cursors are closed when the query() scope exits, completed or not

Design Decisions:
    - Selector predicates compile to JSON-path equality on the document column,
      which PostgreSQL and SQLite both evaluate
    - Pool arguments only for server databases; SQLite gets SQLAlchemy's default pool
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncResult, AsyncSession, create_async_engine, async_sessionmaker,
)

from certledger.core.errors import (
    LedgerQueryError, LedgerUnavailableError, LedgerWriteError,
)
from certledger.core.ledger_protocols import LedgerEntry
from certledger.core.query_builder import parse_selector
from certledger.db.base import Base
from certledger.models.world_state import WorldStateEntry

logger = logging.getLogger(__name__)


def _as_document(value: bytes) -> dict | None:
    try:
        decoded = json.loads(value)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return decoded if isinstance(decoded, dict) else None


class SqlWorldState:
    """Ledger stub bound to one AsyncSession (one logical transaction)."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self.written_keys: list[str] = []

    async def get_state(self, key: str) -> bytes | None:
        try:
            entry = await self._session.get(WorldStateEntry, key)
        except SQLAlchemyError as e:
            logger.error(f"World state read failed: {e}", extra={"ledger_key": key})
            raise LedgerUnavailableError("storage error", key)
        return entry.value if entry else None

    async def put_state(self, key: str, value: bytes) -> None:
        try:
            await self._session.merge(WorldStateEntry(
                key=key, value=value, document=_as_document(value),
            ))
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"World state write failed: {e}", extra={"ledger_key": key})
            raise LedgerWriteError("storage rejected the put", key)
        self.written_keys.append(key)

    @asynccontextmanager
    async def query(self, selector: str) -> AsyncGenerator[AsyncIterator[LedgerEntry], None]:
        predicates = parse_selector(selector)
        stmt = select(WorldStateEntry.key, WorldStateEntry.value)
        for name, expected in predicates.items():
            stmt = stmt.where(WorldStateEntry.document[name].as_string() == expected)
        try:
            result = await self._session.stream(stmt)
        except SQLAlchemyError as e:
            logger.error(f"World state query failed: {e}", extra={"selector": selector})
            raise LedgerQueryError("could not open result iterator", selector)
        try:
            yield self._entries(result, selector)
        finally:
            await result.close()

    @staticmethod
    async def _entries(result: AsyncResult, selector: str) -> AsyncIterator[LedgerEntry]:
        try:
            async for key, value in result:
                yield key, value
        except SQLAlchemyError as e:
            logger.error(f"World state iteration failed: {e}", extra={"selector": selector})
            raise LedgerQueryError("result iteration failed", selector)


class WorldStateManager:
    """Owns the engine and hands out one SqlWorldState per transaction."""

    def __init__(
        self, url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {}
        if not url.startswith("sqlite"):
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[SqlWorldState, None]:
        """One ledger transaction: commit on success, rollback on any error."""
        session = self._session_factory()
        ledger = SqlWorldState(session)
        try:
            yield ledger
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            key = ledger.written_keys[-1] if ledger.written_keys else "<none>"
            logger.error(f"World state commit failed: {e}", extra={"ledger_key": key})
            raise LedgerWriteError("commit failed", key)
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create the world_state table (development and SQLite deployments)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check world-state connectivity (for readiness checks)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"World state health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
