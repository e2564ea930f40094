"""
Location Pool State Handler Implementation

Pool = two Kvrocks sets per event (available / occupied). Membership only
moves between them, always inside a Lua script, so concurrent callers on
any number of instances can never hand out the same slot twice.
"""

from typing import Optional

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor
from src.service.cloakroom.app.interface import ILocationPoolStateHandler
from src.service.cloakroom.driven_adapter.state.key_str_generator import (
    make_available_slots_key,
    make_occupied_slots_key,
)


class LocationPoolStateHandlerImpl(ILocationPoolStateHandler):
    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    @staticmethod
    def _pool_keys(event_id: str) -> list[str]:
        # Order is part of the Lua scripts' contract: KEYS[1]=available, KEYS[2]=occupied
        return [
            make_available_slots_key(event_id=event_id),
            make_occupied_slots_key(event_id=event_id),
        ]

    async def initialize_pool(
        self, *, event_id: str, slot_ids: list[str], ttl_seconds: int
    ) -> Optional[int]:
        with self.tracer.start_as_current_span(
            'pool_handler.initialize_pool',
            attributes={'event.id': event_id, 'slot.count': len(slot_ids)},
        ):
            client = kvrocks_client.get_client()
            added = await lua_script_executor.init_pool(
                client=client,
                keys=self._pool_keys(event_id),
                args=[ttl_seconds, *slot_ids],
            )

            if added < 0:
                Logger.base.info(f'[POOL] Already initialized for event {event_id}')
                return None

            Logger.base.info(f'[POOL] Initialized {added} locations for event {event_id}')
            return added

    async def take_slot(self, *, event_id: str) -> Optional[str]:
        with self.tracer.start_as_current_span(
            'pool_handler.take_slot', attributes={'event.id': event_id}
        ):
            client = kvrocks_client.get_client()
            return await lua_script_executor.take_slot(
                client=client, keys=self._pool_keys(event_id)
            )

    async def return_slot(self, *, event_id: str, slot_id: str) -> bool:
        with self.tracer.start_as_current_span(
            'pool_handler.return_slot', attributes={'event.id': event_id, 'slot.id': slot_id}
        ):
            client = kvrocks_client.get_client()
            return await lua_script_executor.return_slot(
                client=client, keys=self._pool_keys(event_id), args=[slot_id]
            )

    async def get_pool_counts(self, *, event_id: str) -> tuple[int, int]:
        available_key, occupied_key = self._pool_keys(event_id)
        client = kvrocks_client.get_client()

        # Read-only aggregate; MULTI keeps both counts from the same instant
        pipe = client.pipeline(transaction=True)
        pipe.scard(available_key)
        pipe.scard(occupied_key)
        available, occupied = await pipe.execute()
        return int(available), int(occupied)
