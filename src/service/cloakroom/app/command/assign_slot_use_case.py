"""
Assign Slot Use Case

Pool pop + ticket update, each one Lua script. The ticket script refuses
when the ticket already holds a slot or was released, so two concurrent
assigns (or an assign racing a release) cannot leave a second slot on a
ticket: the refused caller hands its slot straight back.
"""

from datetime import datetime, timezone

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import AssignSlotResult
from src.service.cloakroom.app.interface import (
    IEventRegistryStateHandler,
    ILocationPoolStateHandler,
    ITicketLedgerStateHandler,
)
from src.service.cloakroom.domain.enum import ErrorCode, TicketState


CLAIM_REFUSAL_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.TICKET_NOT_FOUND: 'Ticket not found',
    ErrorCode.ALREADY_ASSIGNED: 'Ticket was assigned concurrently',
    ErrorCode.ALREADY_RELEASED: 'Ticket was checked out concurrently',
}


class AssignSlotUseCase:
    def __init__(
        self,
        *,
        event_registry_state_handler: IEventRegistryStateHandler,
        ticket_ledger_state_handler: ITicketLedgerStateHandler,
        pool_state_handler: ILocationPoolStateHandler,
    ):
        self.event_registry_state_handler = event_registry_state_handler
        self.ticket_ledger_state_handler = ticket_ledger_state_handler
        self.pool_state_handler = pool_state_handler

    @Logger.io
    async def execute(self, *, event_id: str, ticket_id: int) -> AssignSlotResult:
        event = await self.event_registry_state_handler.get_event(event_id=event_id)
        ticket = (
            await self.ticket_ledger_state_handler.get_ticket(
                event_id=event_id, ticket_id=ticket_id
            )
            if event is not None
            else None
        )
        if event is None or ticket is None:
            return AssignSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                error=ErrorCode.TICKET_NOT_FOUND,
                error_message='Ticket not found',
            )

        if ticket.state == TicketState.ASSIGNED:
            return AssignSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                slot=ticket.slot,
                error=ErrorCode.ALREADY_ASSIGNED,
                error_message=f'Ticket already has location {ticket.slot}',
            )
        if ticket.state == TicketState.RELEASED:
            return AssignSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                error=ErrorCode.ALREADY_RELEASED,
                error_message='Ticket has already been checked out',
            )

        slot = await self.pool_state_handler.take_slot(event_id=event_id)
        if slot is None:
            Logger.base.warning(f'🚫 [ASSIGN] {event_id} pool exhausted')
            return AssignSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                error=ErrorCode.POOL_EXHAUSTED,
                error_message='No locations available',
            )

        try:
            refusal = await self.ticket_ledger_state_handler.claim_slot(
                event_id=event_id,
                ticket_id=ticket_id,
                slot_id=slot,
                assigned_at=datetime.now(timezone.utc),
                expires_at_epoch=event.expires_at_epoch,
            )
        except Exception:
            # Slot sits in occupied with no ticket pointing at it
            Logger.base.error(
                f'❌ [ASSIGN] {event_id} #{ticket_id} {slot} taken but not recorded, '
                'return it with ReturnSlot'
            )
            raise

        if refusal is not None:
            # Ticket changed since our read: hand the slot straight back
            await self.pool_state_handler.return_slot(event_id=event_id, slot_id=slot)
            Logger.base.info(f'🔁 [ASSIGN] {event_id} #{ticket_id} {refusal}, {slot} returned')
            return AssignSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                error=refusal,
                error_message=CLAIM_REFUSAL_MESSAGES[refusal],
            )

        Logger.base.info(f'📍 [ASSIGN] {event_id} #{ticket_id} -> {slot}')
        return AssignSlotResult(event_id=event_id, ticket_id=ticket_id, slot=slot)
