"""
Event Registry State Handler Interface

Event metadata, creation quotas and the active-event registry.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.cloakroom.domain.entity.event_entity import EventEntity


class IEventRegistryStateHandler(ABC):
    @abstractmethod
    async def event_exists(self, *, event_id: str) -> bool:
        pass

    @abstractmethod
    async def reserve_creation_quota(
        self,
        *,
        event_id: str,
        expires_at_epoch: int,
        now_epoch: int,
        source: Optional[str],
    ) -> Optional[str]:
        """
        Check all creation quotas and, only if every one passes, count the
        creation and register the event as active - in one atomic step.

        Args:
            event_id: Identifier to register
            expires_at_epoch: Event expiry (registry member score)
            now_epoch: Current time, registry members at or before it are swept
            source: Caller scope for the per-source quota (None skips it)

        Returns:
            None when reserved, otherwise the exhausted quota name
            ('active_events' / 'global_window' / 'source_window')
        """
        pass

    @abstractmethod
    async def save_event(self, *, event: EventEntity) -> None:
        """Persist metadata + zeroed ticket counter, both expiring at the event expiry"""
        pass

    @abstractmethod
    async def get_event(self, *, event_id: str) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_active_event_ids(self, *, now_epoch: int) -> list[str]:
        pass
