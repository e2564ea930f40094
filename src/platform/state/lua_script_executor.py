"""
Lua Scripts for Redis/Kvrocks

Simplified approach using redis-py's built-in register_script().
Every pool mutation that must be indivisible runs as one of these scripts.
"""

from pathlib import Path
from typing import Any

from redis.asyncio import Redis
from redis.commands.core import AsyncScript
from redis.exceptions import NoScriptError

from src.platform.constant.path import LUA_SCRIPTS_DIR
from src.platform.logging.loguru_io import Logger


class LuaScripts:
    """Manages Lua scripts using redis-py's register_script()"""

    SCRIPT_NAMES = (
        'init_pool',
        'take_slot',
        'return_slot',
        'reserve_creation_quota',
        'claim_ticket_slot',
        'release_ticket_slot',
    )

    def __init__(self, *, scripts_dir: Path = LUA_SCRIPTS_DIR) -> None:
        self._scripts_dir = scripts_dir
        self._scripts: dict[str, AsyncScript] = {}
        self._sources: dict[str, str] = {}
        self._initialized: bool = False

    async def initialize(self, *, client: Redis) -> None:
        """Load Lua scripts (idempotent)"""
        if self._initialized:
            return

        for name in self.SCRIPT_NAMES:
            script_path = self._scripts_dir / f'{name}.lua'
            if not script_path.exists():
                Logger.base.warning(f'⚠️ [LUA] Script not found: {script_path}')
                continue
            self._sources[name] = script_path.read_text()
            self._scripts[name] = client.register_script(self._sources[name])

        Logger.base.info(f'📜 [LUA] Registered {len(self._scripts)} scripts')
        self._initialized = True

    async def _run(self, name: str, *, client: Redis, keys: list[str], args: list[Any]) -> Any:
        """Execute a registered script with auto-retry on NoScriptError"""
        script = self._scripts.get(name)
        if script is None:
            raise RuntimeError(f'Lua script {name!r} not initialized')

        try:
            return await script(keys=keys, args=args, client=client)
        except NoScriptError:
            # Store restarted / SCRIPT FLUSH - EVALSHA cache is gone
            Logger.base.warning(f'⚠️ [LUA] {name} not found, re-registering...')
            self._scripts[name] = client.register_script(self._sources[name])
            return await self._scripts[name](keys=keys, args=args, client=client)

    async def init_pool(self, *, client: Redis, keys: list[str], args: list[Any]) -> int:
        """Fill the available set once; -1 when the pool already exists"""
        return int(await self._run('init_pool', client=client, keys=keys, args=args))

    async def take_slot(self, *, client: Redis, keys: list[str]) -> str | None:
        """Atomic SPOP available -> SADD occupied"""
        return await self._run('take_slot', client=client, keys=keys, args=[])

    async def return_slot(self, *, client: Redis, keys: list[str], args: list[Any]) -> bool:
        """Atomic SREM occupied -> SADD available (only when it was occupied)"""
        return int(await self._run('return_slot', client=client, keys=keys, args=args)) == 1

    async def reserve_creation_quota(
        self, *, client: Redis, keys: list[str], args: list[Any]
    ) -> str:
        """Check + count creation quotas; 'OK' or the exhausted quota name"""
        return await self._run('reserve_creation_quota', client=client, keys=keys, args=args)

    async def claim_ticket_slot(self, *, client: Redis, keys: list[str], args: list[Any]) -> str:
        """Write slot + assignedAt unless the ticket is missing, assigned or released"""
        return await self._run('claim_ticket_slot', client=client, keys=keys, args=args)

    async def release_ticket_slot(
        self, *, client: Redis, keys: list[str], args: list[Any]
    ) -> str | None:
        """HDEL slot + HSET releasedAt in one step; the cleared slot or None"""
        return await self._run('release_ticket_slot', client=client, keys=keys, args=args)


# Global singleton
lua_script_executor = LuaScripts()
