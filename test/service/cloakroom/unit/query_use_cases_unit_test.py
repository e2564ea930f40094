from unittest.mock import AsyncMock

import pytest

from src.service.cloakroom.app.query.get_event_use_case import GetEventUseCase
from src.service.cloakroom.app.query.get_pool_stats_use_case import GetPoolStatsUseCase
from src.service.cloakroom.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.cloakroom.app.query.list_active_events_use_case import ListActiveEventsUseCase
from src.service.cloakroom.domain.entity.event_entity import EventEntity
from test.service.cloakroom.unit.conftest import TEST_EVENT_ID, make_ticket


@pytest.mark.unit
class TestGetEvent:
    @pytest.mark.asyncio
    async def test_found(self, event: EventEntity) -> None:
        registry = AsyncMock()
        registry.get_event = AsyncMock(return_value=event)

        result = await GetEventUseCase(event_registry_state_handler=registry).get_by_id(
            event_id=TEST_EVENT_ID
        )

        assert result is event

    @pytest.mark.asyncio
    async def test_missing_or_expired_is_none(self) -> None:
        registry = AsyncMock()
        registry.get_event = AsyncMock(return_value=None)

        result = await GetEventUseCase(event_registry_state_handler=registry).get_by_id(
            event_id='gone'
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_exists(self) -> None:
        registry = AsyncMock()
        registry.event_exists = AsyncMock(return_value=True)

        assert await GetEventUseCase(event_registry_state_handler=registry).exists(
            event_id=TEST_EVENT_ID
        )


@pytest.mark.unit
class TestListActiveEvents:
    @pytest.mark.asyncio
    async def test_passes_current_time_for_sweep(self) -> None:
        registry = AsyncMock()
        registry.list_active_event_ids = AsyncMock(return_value=['a', 'b'])

        result = await ListActiveEventsUseCase(event_registry_state_handler=registry).execute()

        assert result == ['a', 'b']
        assert registry.list_active_event_ids.await_args.kwargs['now_epoch'] > 0


@pytest.mark.unit
class TestGetTicket:
    @pytest.fixture
    def mock_ledger(self) -> AsyncMock:
        ledger = AsyncMock()
        ledger.get_ticket = AsyncMock(return_value=make_ticket(token='correct-token-16'))
        ledger.get_ticket_count = AsyncMock(return_value=42)
        return ledger

    @pytest.fixture
    def use_case(self, mock_ledger: AsyncMock) -> GetTicketUseCase:
        return GetTicketUseCase(ticket_ledger_state_handler=mock_ledger)

    @pytest.mark.asyncio
    async def test_get_by_id(self, use_case: GetTicketUseCase) -> None:
        ticket = await use_case.get_by_id(event_id=TEST_EVENT_ID, ticket_id=1)

        assert ticket.ticket_id == 1

    @pytest.mark.asyncio
    async def test_count(self, use_case: GetTicketUseCase) -> None:
        assert await use_case.count(event_id=TEST_EVENT_ID) == 42

    @pytest.mark.asyncio
    async def test_verify_token_matches(self, use_case: GetTicketUseCase) -> None:
        assert await use_case.verify_token(
            event_id=TEST_EVENT_ID, ticket_id=1, token='correct-token-16'
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize('token', ['wrong-token-1234', '', None])
    async def test_verify_token_rejects(self, use_case: GetTicketUseCase, token) -> None:
        assert not await use_case.verify_token(event_id=TEST_EVENT_ID, ticket_id=1, token=token)

    @pytest.mark.asyncio
    async def test_verify_token_missing_ticket(
        self, use_case: GetTicketUseCase, mock_ledger: AsyncMock
    ) -> None:
        mock_ledger.get_ticket.return_value = None

        assert not await use_case.verify_token(event_id=TEST_EVENT_ID, ticket_id=9, token='x')


@pytest.mark.unit
class TestGetPoolStats:
    @pytest.mark.asyncio
    async def test_stats_from_counts(self) -> None:
        pool = AsyncMock()
        pool.get_pool_counts = AsyncMock(return_value=(6, 3))

        stats = await GetPoolStatsUseCase(pool_state_handler=pool).execute(event_id=TEST_EVENT_ID)

        assert stats.available_count == 6
        assert stats.occupied_count == 3
        assert stats.total_count == 9
        assert stats.percent_occupied == 33.3
