import time

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.interface import IEventRegistryStateHandler


class ListActiveEventsUseCase:
    """Monitoring only - ids of events whose expiry is still in the future"""

    def __init__(self, *, event_registry_state_handler: IEventRegistryStateHandler) -> None:
        self.event_registry_state_handler = event_registry_state_handler

    @Logger.io
    async def execute(self) -> list[str]:
        return await self.event_registry_state_handler.list_active_event_ids(
            now_epoch=int(time.time())
        )
