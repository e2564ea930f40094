"""
Error Code Enum - Domain failures returned as values

Expected failures never raise; use cases put one of these codes on their
result object. Store / connection failures are not part of this set and
propagate as exceptions.
"""

from enum import StrEnum


class ErrorCategory(StrEnum):
    QUOTA = 'quota'  # Wait or reduce scope; retrying as-is won't help
    NOT_FOUND = 'not_found'  # Absent and expired are indistinguishable
    STATE_CONFLICT = 'state_conflict'  # Double action - show "already done"
    VALIDATION = 'validation'


class ErrorCode(StrEnum):
    # Quota / capacity
    QUOTA_EXCEEDED = 'quota_exceeded'
    GENERATION_FAILED = 'generation_failed'
    CAPACITY_REACHED = 'capacity_reached'
    POOL_EXHAUSTED = 'pool_exhausted'

    # Not found
    EVENT_NOT_FOUND = 'event_not_found'
    TICKET_NOT_FOUND = 'ticket_not_found'

    # State conflict
    ALREADY_INITIALIZED = 'already_initialized'
    ALREADY_ASSIGNED = 'already_assigned'
    ALREADY_RELEASED = 'already_released'
    NOT_ASSIGNED = 'not_assigned'
    NOT_OCCUPIED = 'not_occupied'

    # Validation
    INVALID_LAYOUT = 'invalid_layout'

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORY_BY_CODE[self]


_CATEGORY_BY_CODE: dict[ErrorCode, ErrorCategory] = {
    ErrorCode.QUOTA_EXCEEDED: ErrorCategory.QUOTA,
    ErrorCode.GENERATION_FAILED: ErrorCategory.QUOTA,
    ErrorCode.CAPACITY_REACHED: ErrorCategory.QUOTA,
    ErrorCode.POOL_EXHAUSTED: ErrorCategory.QUOTA,
    ErrorCode.EVENT_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorCode.ALREADY_INITIALIZED: ErrorCategory.STATE_CONFLICT,
    ErrorCode.ALREADY_ASSIGNED: ErrorCategory.STATE_CONFLICT,
    ErrorCode.ALREADY_RELEASED: ErrorCategory.STATE_CONFLICT,
    ErrorCode.NOT_ASSIGNED: ErrorCategory.STATE_CONFLICT,
    ErrorCode.NOT_OCCUPIED: ErrorCategory.STATE_CONFLICT,
    ErrorCode.INVALID_LAYOUT: ErrorCategory.VALIDATION,
}
