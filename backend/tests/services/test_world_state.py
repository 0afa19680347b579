"""World State Adapter: SQLAlchemy ledger over in-memory SQLite.

Tests cover:
    - get_state returns None for never-written keys, bytes otherwise
    - put_state upserts (second write replaces the first)
    - Selectors filter on dataType and one extra member; non-JSON values never match
    - A transaction rolled back by an exception leaves no mutation
    - The contract runs end to end on the SQL adapter
    - SQLAlchemy failures map to typed ledger errors naming the key or selector,
      and the transaction is rolled back
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from certledger.core.domain_types import DataType
from certledger.core.errors import (
    LedgerQueryError, LedgerUnavailableError, LedgerWriteError,
)
from certledger.core.query_builder import build_selector
from certledger.services.certificate_contract import create_contract


async def _collect(ledger, selector):
    async with ledger.query(selector) as results:
        return [entry async for entry in results]


async def test_get_state_absent_returns_none(world_state):
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("cert_nope") is None


async def test_put_then_get_across_transactions(world_state):
    async with world_state.transaction() as ledger:
        await ledger.put_state("uni_A", b'{"dataType":"university","name":"A"}')
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("uni_A") == b'{"dataType":"university","name":"A"}'


async def test_put_overwrites(world_state):
    async with world_state.transaction() as ledger:
        await ledger.put_state("k", b'{"dataType":"schema","id":"1"}')
    async with world_state.transaction() as ledger:
        await ledger.put_state("k", b'{"dataType":"schema","id":"2"}')
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("k") == b'{"dataType":"schema","id":"2"}'


async def test_query_filters_on_kind_and_field(world_state):
    async with world_state.transaction() as ledger:
        await ledger.put_state("cert_1", b'{"dataType":"certificate","studentPK":"a"}')
        await ledger.put_state("cert_2", b'{"dataType":"certificate","studentPK":"b"}')
        await ledger.put_state("uni_x", b'{"dataType":"university","studentPK":"a"}')
        await ledger.put_state("junk", b"not json at all")
    async with world_state.transaction() as ledger:
        by_a = await _collect(
            ledger, build_selector(DataType.CERTIFICATE, "studentPK", "a"),
        )
        every = await _collect(ledger, build_selector(DataType.CERTIFICATE))
    assert [key for key, _ in by_a] == ["cert_1"]
    assert sorted(key for key, _ in every) == ["cert_1", "cert_2"]


async def test_query_rejects_malformed_selector(world_state):
    async with world_state.transaction() as ledger:
        with pytest.raises(LedgerQueryError):
            await _collect(ledger, "{")


async def test_exception_rolls_back_put(world_state):
    with pytest.raises(RuntimeError):
        async with world_state.transaction() as ledger:
            await ledger.put_state("cert_1", b'{"dataType":"certificate"}')
            raise RuntimeError("abort")
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("cert_1") is None


async def test_contract_end_to_end_on_sql(world_state):
    async with world_state.transaction() as ledger:
        contract = create_contract(ledger)
        await contract.init_ledger()
        await contract.register_university("TEDU", "uni-pk", "Ankara", "d")
        for i in range(2):
            await contract.issue_certificate(
                f"h{i}", "us", "ss", "2024-01-01", f"u{i}", "uni-pk", "stu",
            )
    async with world_state.transaction() as ledger:
        contract = create_contract(ledger)
        assert len(await contract.query_all()) == 2
        assert len(await contract.get_all_certificate_by_university("uni-pk")) == 2
        assert (await contract.query_university_profile_by_name("TEDU")).location == "Ankara"
        assert (await contract.query_certificate_schema("v1")).certificate_type == "Bachelor"


async def test_health_check(world_state):
    assert await world_state.health_check() is True


def _fail_session_method(world_state, monkeypatch, method: str) -> list[AsyncMock]:
    """Make `method` raise SQLAlchemyError on every session the manager hands out.

    Returns the rollback spies, one per session, in creation order.
    """
    real_factory = world_state._session_factory
    rollbacks = []

    def factory():
        session = real_factory()
        setattr(session, method, AsyncMock(side_effect=SQLAlchemyError("injected")))
        rollback = AsyncMock(wraps=session.rollback)
        session.rollback = rollback
        rollbacks.append(rollback)
        return session

    monkeypatch.setattr(world_state, "_session_factory", factory)
    return rollbacks


async def test_commit_failure_raises_write_error_and_rolls_back(world_state, monkeypatch):
    rollbacks = _fail_session_method(world_state, monkeypatch, "commit")
    with pytest.raises(LedgerWriteError) as exc:
        async with world_state.transaction() as ledger:
            await ledger.put_state("cert_1", b'{"dataType":"certificate"}')
    assert exc.value.key == "cert_1"
    assert rollbacks[0].await_count == 1

    monkeypatch.undo()
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("cert_1") is None


async def test_flush_failure_raises_write_error(world_state, monkeypatch):
    rollbacks = _fail_session_method(world_state, monkeypatch, "flush")
    with pytest.raises(LedgerWriteError) as exc:
        async with world_state.transaction() as ledger:
            await ledger.put_state("uni_A", b'{"dataType":"university"}')
    assert exc.value.key == "uni_A"
    assert exc.value.context.ledger_key == "uni_A"
    assert rollbacks[0].await_count == 1

    monkeypatch.undo()
    async with world_state.transaction() as ledger:
        assert await ledger.get_state("uni_A") is None


async def test_get_failure_raises_unavailable(world_state, monkeypatch):
    rollbacks = _fail_session_method(world_state, monkeypatch, "get")
    with pytest.raises(LedgerUnavailableError) as exc:
        async with world_state.transaction() as ledger:
            await ledger.get_state("cert_1")
    assert exc.value.key == "cert_1"
    assert rollbacks[0].await_count == 1


async def test_stream_failure_raises_query_error(world_state, monkeypatch):
    rollbacks = _fail_session_method(world_state, monkeypatch, "stream")
    selector = build_selector(DataType.CERTIFICATE, "studentPK", "a")
    with pytest.raises(LedgerQueryError) as exc:
        async with world_state.transaction() as ledger:
            await _collect(ledger, selector)
    assert exc.value.selector == selector
    assert exc.value.http_status == 503
    assert rollbacks[0].await_count == 1
