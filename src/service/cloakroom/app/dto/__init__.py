"""Cloakroom Application DTOs"""

from src.service.cloakroom.app.dto.operation_result import (
    AssignSlotResult,
    CreateEventResult,
    InitializePoolResult,
    IssueTicketResult,
    OperationResult,
    ReleaseSlotResult,
    ReturnSlotResult,
)
from src.service.cloakroom.app.dto.pool_stats_dto import PoolStats


__all__ = [
    'AssignSlotResult',
    'CreateEventResult',
    'InitializePoolResult',
    'IssueTicketResult',
    'OperationResult',
    'PoolStats',
    'ReleaseSlotResult',
    'ReturnSlotResult',
]
