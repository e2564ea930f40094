from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import ReturnSlotResult
from src.service.cloakroom.app.interface import ILocationPoolStateHandler
from src.service.cloakroom.domain.enum import ErrorCode


class ReturnSlotUseCase:
    def __init__(self, *, pool_state_handler: ILocationPoolStateHandler):
        self.pool_state_handler = pool_state_handler

    @Logger.io
    async def execute(self, *, event_id: str, slot_id: str) -> ReturnSlotResult:
        returned = await self.pool_state_handler.return_slot(event_id=event_id, slot_id=slot_id)
        if not returned:
            return ReturnSlotResult(
                event_id=event_id,
                slot=slot_id,
                error=ErrorCode.NOT_OCCUPIED,
                error_message=f'Location {slot_id} is not occupied',
            )
        return ReturnSlotResult(event_id=event_id, slot=slot_id)
