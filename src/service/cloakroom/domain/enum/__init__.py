"""Cloakroom Domain Enums"""

from src.service.cloakroom.domain.enum.error_code import ErrorCategory, ErrorCode
from src.service.cloakroom.domain.enum.ticket_state import TicketState

__all__ = ['ErrorCategory', 'ErrorCode', 'TicketState']
