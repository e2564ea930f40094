"""
Location Pool State Handler Interface

Every mutation here must be a single server-side atomic step.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILocationPoolStateHandler(ABC):
    @abstractmethod
    async def initialize_pool(
        self, *, event_id: str, slot_ids: list[str], ttl_seconds: int
    ) -> Optional[int]:
        """
        Fill the available set with slot_ids unless the pool already exists.

        Returns:
            Number of slots added, or None when the pool was already initialized
        """
        pass

    @abstractmethod
    async def take_slot(self, *, event_id: str) -> Optional[str]:
        """Move one arbitrary slot available -> occupied; None when exhausted"""
        pass

    @abstractmethod
    async def return_slot(self, *, event_id: str, slot_id: str) -> bool:
        """Move slot occupied -> available; False (no mutation) when it was not occupied"""
        pass

    @abstractmethod
    async def get_pool_counts(self, *, event_id: str) -> tuple[int, int]:
        """(available, occupied) cardinalities"""
        pass
