"""
Operation Result DTOs

Every command returns one of these. Expected failures are carried in
`error`; only transport failures raise.
"""

from typing import Optional

import attrs

from src.service.cloakroom.domain.entity.event_entity import EventEntity
from src.service.cloakroom.domain.enum import ErrorCode


@attrs.define(kw_only=True)
class OperationResult:
    error: Optional[ErrorCode] = None
    error_message: str = ''

    @property
    def success(self) -> bool:
        return self.error is None


@attrs.define(kw_only=True)
class CreateEventResult(OperationResult):
    event: Optional[EventEntity] = None
    total_slots: int = 0


@attrs.define(kw_only=True)
class InitializePoolResult(OperationResult):
    event_id: str
    total_slots: int = 0


@attrs.define(kw_only=True)
class ReturnSlotResult(OperationResult):
    event_id: str
    slot: str


@attrs.define(kw_only=True)
class IssueTicketResult(OperationResult):
    event_id: str
    ticket_id: Optional[int] = None
    token: Optional[str] = attrs.field(default=None, repr=False)


@attrs.define(kw_only=True)
class AssignSlotResult(OperationResult):
    event_id: str
    ticket_id: int
    slot: Optional[str] = None


@attrs.define(kw_only=True)
class ReleaseSlotResult(OperationResult):
    event_id: str
    ticket_id: int
    slot: Optional[str] = None
