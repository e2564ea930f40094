"""
Create Event Use Case

Layout validation -> unguessable id -> quota reservation -> metadata -> pool.
The quota script counts the creation and registers the event in one step,
so every failure before it leaves the store untouched.
"""

from datetime import datetime, timezone
import secrets
from typing import Optional

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import InvalidLayoutError
from src.platform.logging.loguru_io import Logger
from src.service.cloakroom.app.command.initialize_pool_use_case import InitializePoolUseCase
from src.service.cloakroom.app.dto import CreateEventResult
from src.service.cloakroom.app.interface import IEventRegistryStateHandler
from src.service.cloakroom.domain.entity.event_entity import EventEntity
from src.service.cloakroom.domain.enum import ErrorCode
from src.service.cloakroom.domain.value_object import LayoutDescriptor


EVENT_ID_BYTES = 12  # 96 bits -> 16 url-safe chars

QUOTA_MESSAGES = {
    'active_events': 'Too many active events. Please try again later.',
    'global_window': 'Event creation limit reached. Please try again later.',
    'source_window': 'Too many events created from this source. Please try again later.',
}


def generate_event_id() -> str:
    return secrets.token_urlsafe(EVENT_ID_BYTES)


class CreateEventUseCase:
    def __init__(
        self,
        *,
        event_registry_state_handler: IEventRegistryStateHandler,
        initialize_pool_use_case: InitializePoolUseCase,
        settings: Settings,
    ):
        self.event_registry_state_handler = event_registry_state_handler
        self.initialize_pool_use_case = initialize_pool_use_case
        self.settings = settings

    async def _generate_unused_event_id(self) -> Optional[str]:
        for attempt in range(1, self.settings.EVENT_ID_MAX_ATTEMPTS + 1):
            event_id = generate_event_id()
            if not await self.event_registry_state_handler.event_exists(event_id=event_id):
                return event_id
            Logger.base.warning(f'⚠️ [CREATE-EVENT] Id collision on attempt {attempt}')
        return None

    @Logger.io
    async def execute(
        self,
        *,
        layout_descriptor: str,
        name: Optional[str] = '',
        duration_hours: Optional[int] = None,
        source: Optional[str] = None,
    ) -> CreateEventResult:
        try:
            layout = LayoutDescriptor.parse(
                layout_descriptor, max_slots=self.settings.MAX_SLOTS_PER_EVENT
            )
        except InvalidLayoutError as e:
            return CreateEventResult(error=ErrorCode.INVALID_LAYOUT, error_message=e.message)

        event_id = await self._generate_unused_event_id()
        if event_id is None:
            Logger.base.error('❌ [CREATE-EVENT] Could not generate a unique event id')
            return CreateEventResult(
                error=ErrorCode.GENERATION_FAILED,
                error_message='Could not generate a unique event id. Please try again.',
            )

        event = EventEntity(
            event_id=event_id,
            name=(name or '').strip(),
            layout=layout,
            created_at=datetime.now(timezone.utc),
            duration_hours=(
                self.settings.EVENT_DURATION_HOURS if duration_hours is None else duration_hours
            ),
        )

        exhausted = await self.event_registry_state_handler.reserve_creation_quota(
            event_id=event_id,
            expires_at_epoch=event.expires_at_epoch,
            now_epoch=int(event.created_at.timestamp()),
            source=source,
        )
        if exhausted is not None:
            Logger.base.warning(f'🚫 [CREATE-EVENT] Quota exhausted: {exhausted}')
            return CreateEventResult(
                error=ErrorCode.QUOTA_EXCEEDED, error_message=QUOTA_MESSAGES[exhausted]
            )

        await self.event_registry_state_handler.save_event(event=event)

        pool_result = await self.initialize_pool_use_case.execute(
            event_id=event_id, layout=layout, ttl_seconds=event.ttl_seconds
        )
        if not pool_result.success:
            return CreateEventResult(
                event=event, error=pool_result.error, error_message=pool_result.error_message
            )

        Logger.base.info(
            f'✅ [CREATE-EVENT] {event_id} with {pool_result.total_slots} locations ({layout})'
        )
        return CreateEventResult(event=event, total_slots=pool_result.total_slots)
