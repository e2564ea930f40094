from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.interface import IEventRegistryStateHandler
from src.service.cloakroom.domain.entity.event_entity import EventEntity


class GetEventUseCase:
    def __init__(self, *, event_registry_state_handler: IEventRegistryStateHandler) -> None:
        self.event_registry_state_handler = event_registry_state_handler

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> Optional[EventEntity]:
        """Never-existed and expired events both come back as None."""
        event = await self.event_registry_state_handler.get_event(event_id=event_id)
        if event is None:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
        return event

    @Logger.io
    async def exists(self, *, event_id: str) -> bool:
        return await self.event_registry_state_handler.event_exists(event_id=event_id)
