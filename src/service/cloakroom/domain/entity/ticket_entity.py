from datetime import datetime
from typing import Dict, Optional

import attrs

from src.service.cloakroom.domain.enum import TicketState


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@attrs.define
class TicketEntity:
    event_id: str
    ticket_id: int
    token: str = attrs.field(repr=False)
    created_at: datetime
    slot: Optional[str] = None
    assigned_at: Optional[datetime] = None
    released_at: Optional[datetime] = None

    @property
    def state(self) -> TicketState:
        if self.released_at is not None:
            return TicketState.RELEASED
        if self.slot:
            return TicketState.ASSIGNED
        return TicketState.NEW

    def to_mapping(self) -> Dict[str, str]:
        """Hash fields; absent optionals are omitted rather than stored empty"""
        mapping = {
            'token': self.token,
            'createdAt': self.created_at.isoformat(),
        }
        if self.slot:
            mapping['slot'] = self.slot
        if self.assigned_at is not None:
            mapping['assignedAt'] = self.assigned_at.isoformat()
        if self.released_at is not None:
            mapping['releasedAt'] = self.released_at.isoformat()
        return mapping

    @classmethod
    def from_mapping(
        cls, *, event_id: str, ticket_id: int, mapping: Dict[str, str]
    ) -> 'TicketEntity':
        return cls(
            event_id=event_id,
            ticket_id=ticket_id,
            token=mapping.get('token', ''),
            created_at=datetime.fromisoformat(mapping['createdAt']),
            slot=mapping.get('slot') or None,
            assigned_at=_parse_timestamp(mapping.get('assignedAt')),
            released_at=_parse_timestamp(mapping.get('releasedAt')),
        )
