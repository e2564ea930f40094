"""Shared builders for cloakroom unit tests - no store connections."""

from datetime import datetime, timezone
from typing import Optional

import pytest

from src.service.cloakroom.domain.entity.event_entity import EventEntity
from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity
from src.service.cloakroom.domain.value_object import LayoutDescriptor


TEST_EVENT_ID = 'AbCdEfGhIjKlMnOp'
CREATED_AT = datetime(2026, 3, 1, 18, 0, tzinfo=timezone.utc)


def make_event(*, event_id: str = TEST_EVENT_ID, layout: str = 'A-C:1-3') -> EventEntity:
    return EventEntity(
        event_id=event_id,
        name='Test Event',
        layout=LayoutDescriptor.parse(layout),
        created_at=CREATED_AT,
        duration_hours=72,
    )


def make_ticket(
    *,
    ticket_id: int = 1,
    slot: Optional[str] = None,
    released: bool = False,
    token: str = 'tok_1234567890ab',
) -> TicketEntity:
    return TicketEntity(
        event_id=TEST_EVENT_ID,
        ticket_id=ticket_id,
        token=token,
        created_at=CREATED_AT,
        slot=slot,
        assigned_at=CREATED_AT if slot or released else None,
        released_at=CREATED_AT if released else None,
    )


@pytest.fixture
def event() -> EventEntity:
    return make_event()
