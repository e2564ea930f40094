"""
Ticket Ledger State Handler Interface

Ticket counter and ticket records. Every write re-anchors the key expiry
to the owning event's absolute expiry.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.service.cloakroom.domain.entity.ticket_entity import TicketEntity
from src.service.cloakroom.domain.enum import ErrorCode


class ITicketLedgerStateHandler(ABC):
    @abstractmethod
    async def get_ticket_count(self, *, event_id: str) -> int:
        pass

    @abstractmethod
    async def allocate_ticket_id(self, *, event_id: str, expires_at_epoch: int) -> int:
        """Atomic INCR of the event counter"""
        pass

    @abstractmethod
    async def save_ticket(self, *, ticket: TicketEntity, expires_at_epoch: int) -> None:
        pass

    @abstractmethod
    async def get_ticket(self, *, event_id: str, ticket_id: int) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def claim_slot(
        self,
        *,
        event_id: str,
        ticket_id: int,
        slot_id: str,
        assigned_at: datetime,
        expires_at_epoch: int,
    ) -> Optional[ErrorCode]:
        """
        Record slot + assignedAt on a ticket that never held a slot.

        Returns:
            None when recorded; otherwise TICKET_NOT_FOUND, ALREADY_ASSIGNED or
            ALREADY_RELEASED, with the ticket left untouched
        """
        pass

    @abstractmethod
    async def record_release(
        self,
        *,
        event_id: str,
        ticket_id: int,
        released_at: datetime,
        expires_at_epoch: int,
    ) -> Optional[str]:
        """
        Clear the slot field and stamp releasedAt in one step, keeping every other field.

        Returns:
            The slot that was cleared, or None when the ticket held none (only one
            of several concurrent releases gets the slot)
        """
        pass
