"""Cloakroom Domain Value Objects"""

from src.service.cloakroom.domain.value_object.layout_descriptor import (
    LayoutDescriptor,
    make_slot_id,
)

__all__ = ['LayoutDescriptor', 'make_slot_id']
