"""
Test Configuration and Fixtures

- Kvrocks isolation with worker-specific key prefixes (pytest-xdist aware)
- Unit tests (marker `unit`): handlers are AsyncMocks, no store needed
- Integration tests (everything else): live Kvrocks/Redis, keys cleaned per
  test, skipped when no store is reachable
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# key_str_generator.py reads KVROCKS_KEY_PREFIX at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Replace kvrocks client with test client BEFORE any modules import it
    import src.platform.state.kvrocks_client
    from test.kvrocks_test_client import kvrocks_test_client_async

    src.platform.state.kvrocks_client.kvrocks_client = kvrocks_test_client_async


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.add_marker(pytest.mark.integration)
            item.fixturenames.append('clean_kvrocks')


@pytest.fixture(scope='function')
async def clean_kvrocks() -> AsyncGenerator[None, None]:
    from src.platform.state.kvrocks_client import kvrocks_client
    from src.platform.state.lua_script_executor import lua_script_executor

    try:
        client = await kvrocks_client.initialize()
    except (RedisConnectionError, OSError) as e:
        pytest.skip(f'Kvrocks not reachable: {e}')

    await lua_script_executor.initialize(client=client)

    key_prefix = os.getenv('KVROCKS_KEY_PREFIX', 'test_')
    keys: list[str] = await client.keys(f'{key_prefix}*')  # type: ignore
    if keys:
        await client.delete(*keys)

    yield

    keys_after: list[str] = await client.keys(f'{key_prefix}*')  # type: ignore
    if keys_after:
        await client.delete(*keys_after)
    await kvrocks_client.disconnect()
