from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.interface import ILocationPoolStateHandler


class TakeSlotUseCase:
    def __init__(self, *, pool_state_handler: ILocationPoolStateHandler):
        self.pool_state_handler = pool_state_handler

    @Logger.io
    async def execute(self, *, event_id: str) -> Optional[str]:
        """Arbitrary free slot, now occupied; None when the pool is exhausted"""
        return await self.pool_state_handler.take_slot(event_id=event_id)
