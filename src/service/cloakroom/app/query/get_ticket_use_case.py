import hmac
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.interface import ITicketLedgerStateHandler
from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity


class GetTicketUseCase:
    def __init__(self, *, ticket_ledger_state_handler: ITicketLedgerStateHandler) -> None:
        self.ticket_ledger_state_handler = ticket_ledger_state_handler

    @Logger.io
    async def get_by_id(self, *, event_id: str, ticket_id: int) -> Optional[TicketEntity]:
        return await self.ticket_ledger_state_handler.get_ticket(
            event_id=event_id, ticket_id=ticket_id
        )

    @Logger.io
    async def count(self, *, event_id: str) -> int:
        return await self.ticket_ledger_state_handler.get_ticket_count(event_id=event_id)

    @Logger.io
    async def verify_token(self, *, event_id: str, ticket_id: int, token: str) -> bool:
        """Guest access check; missing / expired tickets never verify"""
        ticket = await self.ticket_ledger_state_handler.get_ticket(
            event_id=event_id, ticket_id=ticket_id
        )
        if ticket is None or not ticket.token:
            return False
        return hmac.compare_digest(ticket.token.encode(), (token or '').encode())
