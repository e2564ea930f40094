from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import PoolStats
from src.service.cloakroom.app.interface import ILocationPoolStateHandler


class GetPoolStatsUseCase:
    def __init__(self, *, pool_state_handler: ILocationPoolStateHandler) -> None:
        self.pool_state_handler = pool_state_handler

    @Logger.io
    async def execute(self, *, event_id: str) -> PoolStats:
        available, occupied = await self.pool_state_handler.get_pool_counts(event_id=event_id)
        return PoolStats.from_counts(available=available, occupied=occupied)
