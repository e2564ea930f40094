"""
Ticket Ledger State Handler Implementation

Key layout:
- event:{id}:counter      int   last issued ticket number
- event:{id}:ticket:{n}   hash  {token, slot, createdAt, assignedAt, releasedAt}

Slot changes on a ticket run as Lua scripts, so no reader ever sees a ticket
halfway between two states. Ticket keys and the counter are re-anchored with
EXPIREAT to the event's stored absolute expiry on every write, so they can
never outlive the event.
"""

from datetime import datetime
from typing import Optional

from opentelemetry import trace

from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor
from src.service.cloakroom.app.interface import ITicketLedgerStateHandler
from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity
from src.service.cloakroom.domain.enum import ErrorCode
from src.service.cloakroom.driven_adapter.state.key_str_generator import (
    make_ticket_counter_key,
    make_ticket_key,
)


SLOT_CLAIMED = 'OK'

# claim_ticket_slot.lua refusal -> error reported to the caller
CLAIM_REFUSALS: dict[str, ErrorCode] = {
    'missing': ErrorCode.TICKET_NOT_FOUND,
    'assigned': ErrorCode.ALREADY_ASSIGNED,
    'released': ErrorCode.ALREADY_RELEASED,
}


class TicketLedgerStateHandlerImpl(ITicketLedgerStateHandler):
    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    async def get_ticket_count(self, *, event_id: str) -> int:
        client = kvrocks_client.get_client()
        count = await client.get(make_ticket_counter_key(event_id=event_id))
        return int(count) if count else 0

    async def allocate_ticket_id(self, *, event_id: str, expires_at_epoch: int) -> int:
        with self.tracer.start_as_current_span(
            'ledger_handler.allocate_ticket_id', attributes={'event.id': event_id}
        ):
            counter_key = make_ticket_counter_key(event_id=event_id)
            client = kvrocks_client.get_client()

            pipe = client.pipeline(transaction=True)
            pipe.incr(counter_key)
            pipe.expireat(counter_key, expires_at_epoch)
            ticket_id, _ = await pipe.execute()
            return int(ticket_id)

    async def save_ticket(self, *, ticket: TicketEntity, expires_at_epoch: int) -> None:
        ticket_key = make_ticket_key(event_id=ticket.event_id, ticket_id=ticket.ticket_id)
        client = kvrocks_client.get_client()

        pipe = client.pipeline(transaction=True)
        pipe.hset(ticket_key, mapping=ticket.to_mapping())
        pipe.expireat(ticket_key, expires_at_epoch)
        await pipe.execute()

    async def get_ticket(self, *, event_id: str, ticket_id: int) -> Optional[TicketEntity]:
        client = kvrocks_client.get_client()
        mapping = await client.hgetall(make_ticket_key(event_id=event_id, ticket_id=ticket_id))
        if not mapping:
            return None
        return TicketEntity.from_mapping(event_id=event_id, ticket_id=ticket_id, mapping=mapping)

    async def claim_slot(
        self,
        *,
        event_id: str,
        ticket_id: int,
        slot_id: str,
        assigned_at: datetime,
        expires_at_epoch: int,
    ) -> Optional[ErrorCode]:
        with self.tracer.start_as_current_span(
            'ledger_handler.claim_slot',
            attributes={'event.id': event_id, 'ticket.id': ticket_id, 'slot.id': slot_id},
        ):
            client = kvrocks_client.get_client()
            outcome = await lua_script_executor.claim_ticket_slot(
                client=client,
                keys=[make_ticket_key(event_id=event_id, ticket_id=ticket_id)],
                args=[slot_id, assigned_at.isoformat(), expires_at_epoch],
            )
            if outcome == SLOT_CLAIMED:
                return None
            return CLAIM_REFUSALS[outcome]

    async def record_release(
        self,
        *,
        event_id: str,
        ticket_id: int,
        released_at: datetime,
        expires_at_epoch: int,
    ) -> Optional[str]:
        with self.tracer.start_as_current_span(
            'ledger_handler.record_release',
            attributes={'event.id': event_id, 'ticket.id': ticket_id},
        ):
            client = kvrocks_client.get_client()
            return await lua_script_executor.release_ticket_slot(
                client=client,
                keys=[make_ticket_key(event_id=event_id, ticket_id=ticket_id)],
                args=[released_at.isoformat(), expires_at_epoch],
            )
