"""
Ticket State Enum

NEW --assign--> ASSIGNED --release--> RELEASED
"""

from enum import StrEnum


class TicketState(StrEnum):
    NEW = 'new'
    ASSIGNED = 'assigned'
    RELEASED = 'released'
