"""
Key String Generator

Helper functions for generating Redis/Kvrocks keys. Everything an event
owns lives under `event:{event_id}:` so it can be namespaced and expired
together.
"""

import os


# Get key prefix from environment for test isolation
_KEY_PREFIX = os.getenv('KVROCKS_KEY_PREFIX', '')


def _make_key(key: str) -> str:
    """Add prefix to key for test isolation in parallel testing"""
    return f'{_KEY_PREFIX}{key}'


def make_event_meta_key(*, event_id: str) -> str:
    return _make_key(f'event:{event_id}:meta')


def make_ticket_counter_key(*, event_id: str) -> str:
    return _make_key(f'event:{event_id}:counter')


def make_ticket_key(*, event_id: str, ticket_id: int) -> str:
    return _make_key(f'event:{event_id}:ticket:{ticket_id}')


def make_available_slots_key(*, event_id: str) -> str:
    return _make_key(f'event:{event_id}:available')


def make_occupied_slots_key(*, event_id: str) -> str:
    return _make_key(f'event:{event_id}:occupied')


def make_active_events_key() -> str:
    return _make_key('active_events')


def make_global_creation_window_key() -> str:
    return _make_key('events_created_this_window')


def make_source_creation_window_key(*, source: str) -> str:
    return _make_key(f'ratelimit:events:{source}')
