"""
Event Registry State Handler Implementation

Key layout:
- event:{id}:meta     hash  {name, layoutDescriptor, createdAt, expiresAt, durationHours}
- event:{id}:counter  int   ticket counter, starts at 0
- active_events       zset  event id -> expiry epoch (swept on every read)
"""

from typing import Optional

from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor
from src.service.cloakroom.app.interface import IEventRegistryStateHandler
from src.service.cloakroom.domain.entity.event_entity import EventEntity
from src.service.cloakroom.driven_adapter.state.key_str_generator import (
    make_active_events_key,
    make_event_meta_key,
    make_global_creation_window_key,
    make_source_creation_window_key,
    make_ticket_counter_key,
)


QUOTA_RESERVED = 'OK'


class EventRegistryStateHandlerImpl(IEventRegistryStateHandler):
    def __init__(self, *, settings: Settings) -> None:
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    async def event_exists(self, *, event_id: str) -> bool:
        client = kvrocks_client.get_client()
        return bool(await client.exists(make_event_meta_key(event_id=event_id)))

    async def reserve_creation_quota(
        self,
        *,
        event_id: str,
        expires_at_epoch: int,
        now_epoch: int,
        source: Optional[str],
    ) -> Optional[str]:
        with self.tracer.start_as_current_span(
            'registry_handler.reserve_creation_quota',
            attributes={'event.id': event_id, 'source.scoped': source is not None},
        ):
            keys = [make_active_events_key(), make_global_creation_window_key()]
            if source is not None:
                keys.append(make_source_creation_window_key(source=source))

            client = kvrocks_client.get_client()
            outcome = await lua_script_executor.reserve_creation_quota(
                client=client,
                keys=keys,
                args=[
                    now_epoch,
                    event_id,
                    expires_at_epoch,
                    self.settings.MAX_ACTIVE_EVENTS,
                    self.settings.MAX_EVENTS_PER_WINDOW_GLOBAL,
                    self.settings.MAX_EVENTS_PER_WINDOW_PER_SOURCE,
                    self.settings.CREATION_WINDOW_SECONDS,
                ],
            )
            return None if outcome == QUOTA_RESERVED else outcome

    async def save_event(self, *, event: EventEntity) -> None:
        with self.tracer.start_as_current_span(
            'registry_handler.save_event', attributes={'event.id': event.event_id}
        ):
            meta_key = make_event_meta_key(event_id=event.event_id)
            counter_key = make_ticket_counter_key(event_id=event.event_id)

            client = kvrocks_client.get_client()
            pipe = client.pipeline(transaction=True)
            pipe.hset(meta_key, mapping=event.to_mapping())
            pipe.expireat(meta_key, event.expires_at_epoch)
            pipe.set(counter_key, 0)
            pipe.expireat(counter_key, event.expires_at_epoch)
            await pipe.execute()

            Logger.base.info(
                f'[EVENT CREATED] {event.event_id}, duration {event.duration_hours}h, '
                f'expires {event.expires_at.isoformat()}'
            )

    async def get_event(self, *, event_id: str) -> Optional[EventEntity]:
        client = kvrocks_client.get_client()
        mapping = await client.hgetall(make_event_meta_key(event_id=event_id))
        if not mapping:
            return None
        return EventEntity.from_mapping(event_id=event_id, mapping=mapping)

    async def list_active_event_ids(self, *, now_epoch: int) -> list[str]:
        key = make_active_events_key()
        client = kvrocks_client.get_client()

        pipe = client.pipeline(transaction=True)
        pipe.zremrangebyscore(key, '-inf', now_epoch)
        pipe.zrange(key, 0, -1)
        swept, event_ids = await pipe.execute()

        if swept:
            Logger.base.debug(f'[REGISTRY] Swept {swept} expired events')
        return list(event_ids)
