"""
Issue Ticket Use Case

Sequential ticket numbers per event. The capacity check reads the counter
before INCR, so concurrent issuers may overshoot the ceiling by a few.
"""

from datetime import datetime, timezone
import secrets

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import IssueTicketResult
from src.service.cloakroom.app.interface import (
    IEventRegistryStateHandler,
    ITicketLedgerStateHandler,
)
from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity
from src.service.cloakroom.domain.enum import ErrorCode


TICKET_TOKEN_BYTES = 12


def generate_ticket_token() -> str:
    return secrets.token_urlsafe(TICKET_TOKEN_BYTES)


class IssueTicketUseCase:
    def __init__(
        self,
        *,
        event_registry_state_handler: IEventRegistryStateHandler,
        ticket_ledger_state_handler: ITicketLedgerStateHandler,
        settings: Settings,
    ):
        self.event_registry_state_handler = event_registry_state_handler
        self.ticket_ledger_state_handler = ticket_ledger_state_handler
        self.settings = settings

    @Logger.io
    async def execute(self, *, event_id: str) -> IssueTicketResult:
        event = await self.event_registry_state_handler.get_event(event_id=event_id)
        if event is None:
            return IssueTicketResult(
                event_id=event_id,
                error=ErrorCode.EVENT_NOT_FOUND,
                error_message='Event not found or expired',
            )

        issued = await self.ticket_ledger_state_handler.get_ticket_count(event_id=event_id)
        if issued >= self.settings.MAX_TICKETS_PER_EVENT:
            Logger.base.warning(f'🚫 [ISSUE-TICKET] {event_id} reached {issued} tickets')
            return IssueTicketResult(
                event_id=event_id,
                error=ErrorCode.CAPACITY_REACHED,
                error_message=(
                    f'This event has reached its maximum of '
                    f'{self.settings.MAX_TICKETS_PER_EVENT} tickets'
                ),
            )

        ticket_id = await self.ticket_ledger_state_handler.allocate_ticket_id(
            event_id=event_id, expires_at_epoch=event.expires_at_epoch
        )
        ticket = TicketEntity(
            event_id=event_id,
            ticket_id=ticket_id,
            token=generate_ticket_token(),
            created_at=datetime.now(timezone.utc),
        )
        await self.ticket_ledger_state_handler.save_ticket(
            ticket=ticket, expires_at_epoch=event.expires_at_epoch
        )

        Logger.base.info(f'🎫 [ISSUE-TICKET] {event_id} #{ticket_id}')
        return IssueTicketResult(event_id=event_id, ticket_id=ticket_id, token=ticket.token)
