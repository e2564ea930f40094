from datetime import datetime, timedelta
import math
from typing import Dict

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cloakroom.domain.value_object import LayoutDescriptor


SECONDS_PER_HOUR = 3600


def _validate_duration(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise DomainError(f'Event {attribute.name} must be at least 1 hour, got {value}')


@attrs.define
class EventEntity:
    event_id: str
    layout: LayoutDescriptor
    created_at: datetime
    duration_hours: int = attrs.field(validator=_validate_duration)
    name: str = ''
    expires_at: datetime = attrs.field()

    @expires_at.default
    def _default_expires_at(self) -> datetime:
        return self.created_at + timedelta(hours=self.duration_hours)

    @property
    def ttl_seconds(self) -> int:
        return self.duration_hours * SECONDS_PER_HOUR

    @property
    def expires_at_epoch(self) -> int:
        """Absolute expiry every key under this event is anchored to (EXPIREAT)"""
        return math.ceil(self.expires_at.timestamp())

    def to_mapping(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'layoutDescriptor': str(self.layout),
            'createdAt': self.created_at.isoformat(),
            'expiresAt': self.expires_at.isoformat(),
            'durationHours': str(self.duration_hours),
        }

    @classmethod
    def from_mapping(cls, *, event_id: str, mapping: Dict[str, str]) -> 'EventEntity':
        return cls(
            event_id=event_id,
            name=mapping.get('name', ''),
            layout=LayoutDescriptor.parse(mapping['layoutDescriptor']),
            created_at=datetime.fromisoformat(mapping['createdAt']),
            expires_at=datetime.fromisoformat(mapping['expiresAt']),
            duration_hours=int(mapping['durationHours']),
        )
