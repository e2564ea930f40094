"""
Initialize Pool Use Case

Expands a layout descriptor and fills the event's available set exactly once.
"""

from typing import Union

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import InvalidLayoutError
from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.dto import InitializePoolResult
from src.service.cloakroom.app.interface import ILocationPoolStateHandler
from src.service.cloakroom.domain.enum import ErrorCode
from src.service.cloakroom.domain.value_object import LayoutDescriptor


class InitializePoolUseCase:
    def __init__(self, *, pool_state_handler: ILocationPoolStateHandler, settings: Settings):
        self.pool_state_handler = pool_state_handler
        self.settings = settings

    @Logger.io
    async def execute(
        self,
        *,
        event_id: str,
        layout: Union[str, LayoutDescriptor],
        ttl_seconds: int,
    ) -> InitializePoolResult:
        try:
            if isinstance(layout, str):
                layout = LayoutDescriptor.parse(layout, max_slots=self.settings.MAX_SLOTS_PER_EVENT)
            else:
                layout.ensure_within(max_slots=self.settings.MAX_SLOTS_PER_EVENT)
        except InvalidLayoutError as e:
            Logger.base.warning(f'⚠️ [INIT-POOL] {event_id}: {e.message}')
            return InitializePoolResult(
                event_id=event_id, error=ErrorCode.INVALID_LAYOUT, error_message=e.message
            )

        added = await self.pool_state_handler.initialize_pool(
            event_id=event_id, slot_ids=layout.expand(), ttl_seconds=ttl_seconds
        )
        if added is None:
            return InitializePoolResult(
                event_id=event_id,
                error=ErrorCode.ALREADY_INITIALIZED,
                error_message=f'Pool for event {event_id} is already initialized',
            )

        return InitializePoolResult(event_id=event_id, total_slots=added)
