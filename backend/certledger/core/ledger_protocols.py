"""Ledger Protocols: the capability contract the core needs from the world state.

Invariants:
    - Core NEVER imports from infrastructure; implementations are injected
    - get_state returns None for a key that was never written (absence is not an error)
    - put_state is an unconditional upsert; failures raise LedgerWriteError
    - query yields (key, value) pairs in unspecified order, once, and releases its
      cursor when the `async with` block exits on every path

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - Async methods: implementations do IO; the contract awaits them in sequence
"""

from contextlib import AbstractAsyncContextManager
from typing import AsyncIterator, Protocol

LedgerEntry = tuple[str, bytes]


class LedgerStub(Protocol):
    """Point get, point put, selector range query over the world state."""
    async def get_state(self, key: str) -> bytes | None: ...
    async def put_state(self, key: str, value: bytes) -> None: ...
    def query(
        self, selector: str,
    ) -> AbstractAsyncContextManager[AsyncIterator[LedgerEntry]]: ...
