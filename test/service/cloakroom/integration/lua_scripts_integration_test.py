"""
Integration tests for the pool and ticket Lua scripts against a live Kvrocks/Redis.

Skipped automatically (see test/conftest.py) when no store is reachable.
"""

import asyncio
from datetime import datetime, timezone
import time

import pytest

from src.platform.state.kvrocks_client import kvrocks_client
from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity
from src.service.cloakroom.domain.enum import ErrorCode, TicketState
from src.service.cloakroom.domain.value_object import LayoutDescriptor
from src.service.cloakroom.driven_adapter.state.key_str_generator import (
    make_available_slots_key,
    make_occupied_slots_key,
    make_ticket_key,
)
from src.service.cloakroom.driven_adapter.state.location_pool_state_handler_impl import (
    LocationPoolStateHandlerImpl,
)
from src.service.cloakroom.driven_adapter.state.ticket_ledger_state_handler_impl import (
    TicketLedgerStateHandlerImpl,
)


EVENT_ID = 'LuaPoolTestEvent'


@pytest.fixture
def pool() -> LocationPoolStateHandlerImpl:
    return LocationPoolStateHandlerImpl()


async def _init(pool: LocationPoolStateHandlerImpl, layout: str = 'A-C:1-3') -> int:
    added = await pool.initialize_pool(
        event_id=EVENT_ID, slot_ids=LayoutDescriptor.parse(layout).expand(), ttl_seconds=600
    )
    assert added is not None
    return added


class TestInitPool:
    @pytest.mark.asyncio
    async def test_fills_available_with_ttl(self, pool: LocationPoolStateHandlerImpl) -> None:
        assert await _init(pool) == 9

        client = kvrocks_client.get_client()
        members = await client.smembers(make_available_slots_key(event_id=EVENT_ID))
        assert members == {f'{r}-{p}' for r in 'ABC' for p in (1, 2, 3)}
        assert 0 < await client.ttl(make_available_slots_key(event_id=EVENT_ID)) <= 600

    @pytest.mark.asyncio
    async def test_second_init_is_rejected_without_mutation(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        await _init(pool)
        await pool.take_slot(event_id=EVENT_ID)

        again = await pool.initialize_pool(
            event_id=EVENT_ID, slot_ids=['Z-1', 'Z-2'], ttl_seconds=600
        )

        assert again is None
        assert await pool.get_pool_counts(event_id=EVENT_ID) == (8, 1)

    @pytest.mark.asyncio
    async def test_init_rejected_when_only_occupied_remains(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        # Given: every slot taken, so the available set no longer exists
        await _init(pool, 'A-A:1-2')
        await pool.take_slot(event_id=EVENT_ID)
        await pool.take_slot(event_id=EVENT_ID)

        # Then: the pool still counts as initialized
        assert (
            await pool.initialize_pool(event_id=EVENT_ID, slot_ids=['A-1'], ttl_seconds=600)
            is None
        )

    @pytest.mark.asyncio
    async def test_large_layout_in_batches(self, pool: LocationPoolStateHandlerImpl) -> None:
        assert await _init(pool, 'A-J:1-1000') == 10_000
        assert await pool.get_pool_counts(event_id=EVENT_ID) == (10_000, 0)


class TestTakeAndReturn:
    @pytest.mark.asyncio
    async def test_take_moves_slot_and_inherits_ttl(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        await _init(pool)

        slot = await pool.take_slot(event_id=EVENT_ID)

        client = kvrocks_client.get_client()
        assert slot is not None
        assert await client.sismember(make_occupied_slots_key(event_id=EVENT_ID), slot)
        assert not await client.sismember(make_available_slots_key(event_id=EVENT_ID), slot)
        assert await client.ttl(make_occupied_slots_key(event_id=EVENT_ID)) > 0

    @pytest.mark.asyncio
    async def test_take_from_empty_pool(self, pool: LocationPoolStateHandlerImpl) -> None:
        assert await pool.take_slot(event_id='NeverInitialized') is None

    @pytest.mark.asyncio
    async def test_exhaustion(self, pool: LocationPoolStateHandlerImpl) -> None:
        await _init(pool, 'A-A:1-2')

        taken = [await pool.take_slot(event_id=EVENT_ID) for _ in range(3)]

        assert sorted(taken[:2]) == ['A-1', 'A-2']
        assert taken[2] is None
        assert await pool.get_pool_counts(event_id=EVENT_ID) == (0, 2)

    @pytest.mark.asyncio
    async def test_return_slot_recreates_available_with_ttl(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        await _init(pool, 'A-A:1-1')
        slot = await pool.take_slot(event_id=EVENT_ID)

        assert await pool.return_slot(event_id=EVENT_ID, slot_id=slot) is True

        client = kvrocks_client.get_client()
        assert await client.ttl(make_available_slots_key(event_id=EVENT_ID)) > 0
        assert await pool.get_pool_counts(event_id=EVENT_ID) == (1, 0)

    @pytest.mark.asyncio
    async def test_return_unoccupied_slot_is_rejected(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        await _init(pool)

        assert await pool.return_slot(event_id=EVENT_ID, slot_id='A-1') is False
        assert await pool.return_slot(event_id=EVENT_ID, slot_id='Q-99') is False
        assert await pool.get_pool_counts(event_id=EVENT_ID) == (9, 0)


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_no_double_assignment_under_concurrent_takes(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        # Given: 100 slots, 150 concurrent takers
        await _init(pool, 'A-J:1-10')

        results = await asyncio.gather(*(pool.take_slot(event_id=EVENT_ID) for _ in range(150)))

        # Then: every slot handed out exactly once, the rest see exhaustion
        slots = [slot for slot in results if slot is not None]
        assert len(slots) == 100
        assert len(set(slots)) == 100
        assert results.count(None) == 50

    @pytest.mark.asyncio
    async def test_conservation_under_mixed_traffic(
        self, pool: LocationPoolStateHandlerImpl
    ) -> None:
        await _init(pool, 'A-E:1-10')

        async def churn() -> None:
            for _ in range(5):
                slot = await pool.take_slot(event_id=EVENT_ID)
                if slot is not None:
                    await pool.return_slot(event_id=EVENT_ID, slot_id=slot)

        await asyncio.gather(*(churn() for _ in range(20)))

        available, occupied = await pool.get_pool_counts(event_id=EVENT_ID)
        assert available + occupied == 50
        assert occupied == 0


class TestTicketSlotScripts:
    @pytest.fixture
    def ledger(self) -> TicketLedgerStateHandlerImpl:
        return TicketLedgerStateHandlerImpl()

    @pytest.fixture
    def expires_at_epoch(self) -> int:
        return int(time.time()) + 600

    async def _save_new_ticket(
        self, ledger: TicketLedgerStateHandlerImpl, expires_at_epoch: int
    ) -> None:
        ticket = TicketEntity(
            event_id=EVENT_ID,
            ticket_id=1,
            token='tok_1234567890ab',
            created_at=datetime.now(timezone.utc),
        )
        await ledger.save_ticket(ticket=ticket, expires_at_epoch=expires_at_epoch)

    async def _claim(
        self, ledger: TicketLedgerStateHandlerImpl, slot_id: str, expires_at_epoch: int
    ) -> ErrorCode | None:
        return await ledger.claim_slot(
            event_id=EVENT_ID,
            ticket_id=1,
            slot_id=slot_id,
            assigned_at=datetime.now(timezone.utc),
            expires_at_epoch=expires_at_epoch,
        )

    async def _release(
        self, ledger: TicketLedgerStateHandlerImpl, expires_at_epoch: int
    ) -> str | None:
        return await ledger.record_release(
            event_id=EVENT_ID,
            ticket_id=1,
            released_at=datetime.now(timezone.utc),
            expires_at_epoch=expires_at_epoch,
        )

    @pytest.mark.asyncio
    async def test_claim_on_missing_ticket_creates_nothing(
        self, ledger: TicketLedgerStateHandlerImpl, expires_at_epoch: int
    ) -> None:
        refusal = await self._claim(ledger, 'A-1', expires_at_epoch)

        assert refusal == ErrorCode.TICKET_NOT_FOUND
        client = kvrocks_client.get_client()
        assert await client.exists(make_ticket_key(event_id=EVENT_ID, ticket_id=1)) == 0

    @pytest.mark.asyncio
    async def test_claim_then_release_walks_the_states(
        self, ledger: TicketLedgerStateHandlerImpl, expires_at_epoch: int
    ) -> None:
        await self._save_new_ticket(ledger, expires_at_epoch)

        assert await self._claim(ledger, 'A-1', expires_at_epoch) is None
        assert await self._claim(ledger, 'A-2', expires_at_epoch) == ErrorCode.ALREADY_ASSIGNED
        assert await self._release(ledger, expires_at_epoch) == 'A-1'
        assert await self._release(ledger, expires_at_epoch) is None
        assert await self._claim(ledger, 'A-3', expires_at_epoch) == ErrorCode.ALREADY_RELEASED

        ticket = await ledger.get_ticket(event_id=EVENT_ID, ticket_id=1)
        assert ticket.state == TicketState.RELEASED
        assert ticket.slot is None
        assert ticket.assigned_at is not None

    @pytest.mark.asyncio
    async def test_concurrent_releases_hand_out_the_slot_once(
        self, ledger: TicketLedgerStateHandlerImpl, expires_at_epoch: int
    ) -> None:
        await self._save_new_ticket(ledger, expires_at_epoch)
        await self._claim(ledger, 'B-7', expires_at_epoch)

        results = await asyncio.gather(
            *(self._release(ledger, expires_at_epoch) for _ in range(10))
        )

        assert results.count('B-7') == 1
        assert results.count(None) == 9
