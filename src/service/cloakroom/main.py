"""
Cloakroom Allocation Core - Entry Point

The core has no transport of its own. A caller (HTTP app, worker, script)
enters `lifespan()` once and then resolves use cases from the container:

    async with lifespan() as container:
        result = await container.create_event_use_case().execute(
            layout_descriptor='A-F:1-50', name='Winter Gala'
        )
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.platform.config.di import Container, cleanup, container, setup
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.platform.state.lua_script_executor import lua_script_executor


@asynccontextmanager
async def lifespan() -> AsyncIterator[Container]:
    """Manage core lifespan: startup and shutdown"""
    # Startup
    Logger.base.info('🚀 [Cloakroom] Starting up...')
    setup()

    client = await kvrocks_client.initialize()
    await lua_script_executor.initialize(client=client)
    Logger.base.info('✅ [Cloakroom] Startup complete')

    try:
        yield container
    finally:
        # Shutdown
        Logger.base.info('🛑 [Cloakroom] Shutting down...')
        await kvrocks_client.disconnect()
        cleanup()
        Logger.base.info('👋 [Cloakroom] Shutdown complete')


async def health_check() -> bool:
    return await kvrocks_client.ping()
