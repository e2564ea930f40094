"""
Release Slot Use Case

Ticket update first, then pool push. The ticket script clears the slot and
stamps releasedAt in one step and hands the slot to exactly one caller;
only that caller pushes it back.
"""

from datetime import datetime, timezone

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import ReleaseSlotResult
from src.service.cloakroom.app.interface import (
    IEventRegistryStateHandler,
    ILocationPoolStateHandler,
    ITicketLedgerStateHandler,
)
from src.service.cloakroom.domain.enum import ErrorCode


class ReleaseSlotUseCase:
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

    def _not_assigned(self, event_id: str, ticket_id: int) -> ReleaseSlotResult:
        return ReleaseSlotResult(
            event_id=event_id,
            ticket_id=ticket_id,
            error=ErrorCode.NOT_ASSIGNED,
            error_message='Ticket has no location assigned',
        )

    @Logger.io
    async def execute(self, *, event_id: str, ticket_id: int) -> ReleaseSlotResult:
        event = await self.event_registry_state_handler.get_event(event_id=event_id)
        ticket = (
            await self.ticket_ledger_state_handler.get_ticket(
                event_id=event_id, ticket_id=ticket_id
            )
            if event is not None
            else None
        )
        if event is None or ticket is None:
            return ReleaseSlotResult(
                event_id=event_id,
                ticket_id=ticket_id,
                error=ErrorCode.TICKET_NOT_FOUND,
                error_message='Ticket not found',
            )

        if not ticket.slot:
            return self._not_assigned(event_id, ticket_id)

        slot = await self.ticket_ledger_state_handler.record_release(
            event_id=event_id,
            ticket_id=ticket_id,
            released_at=datetime.now(timezone.utc),
            expires_at_epoch=event.expires_at_epoch,
        )
        if slot is None:
            Logger.base.info(f'🔁 [RELEASE] {event_id} #{ticket_id} already released concurrently')
            return self._not_assigned(event_id, ticket_id)

        try:
            returned = await self.pool_state_handler.return_slot(event_id=event_id, slot_id=slot)
        except Exception:
            # Ticket is released but the slot still sits in occupied
            Logger.base.error(
                f'❌ [RELEASE] {event_id} #{ticket_id} released but {slot} not returned, '
                'return it with ReturnSlot'
            )
            raise

        if not returned:
            Logger.base.warning(f'⚠️ [RELEASE] {event_id} {slot} was not occupied')
            return self._not_assigned(event_id, ticket_id)

        Logger.base.info(f'🔓 [RELEASE] {event_id} #{ticket_id} freed {slot}')
        return ReleaseSlotResult(event_id=event_id, ticket_id=ticket_id, slot=slot)
