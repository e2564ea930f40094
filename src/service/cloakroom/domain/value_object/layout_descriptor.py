"""
Layout Descriptor - Value Object

Compact text form of a two-dimensional slot range:
ranks (single letters) x positions (1-based numbers).

    "A-C:1-3"  ->  A-1, A-2, A-3, B-1, B-2, B-3, C-1, C-2, C-3
"""

import re
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidLayoutError


_DESCRIPTOR_PATTERN = re.compile(
    r'^\s*(?P<rank_start>[A-Za-z])\s*-\s*(?P<rank_end>[A-Za-z])\s*'
    r':\s*(?P<position_start>\d+)\s*-\s*(?P<position_end>\d+)\s*$'
)


def make_slot_id(rank: str, position: int) -> str:
    return f'{rank}-{position}'


def _to_rank(value: object) -> str:
    if not isinstance(value, str):
        raise InvalidLayoutError(f'Layout rank must be a letter, got {value!r}')
    return value.strip().upper()


def _to_position(value: object) -> int:
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise InvalidLayoutError(f'Layout position must be a number, got {value!r}') from None


def _validate_rank(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if len(value) != 1 or not ('A' <= value <= 'Z'):
        raise InvalidLayoutError(f'Layout {attribute.name} must be a single letter A-Z, got {value!r}')


def _validate_position(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise InvalidLayoutError(f'Layout {attribute.name} must be >= 1, got {value}')


@attrs.frozen
class LayoutDescriptor:
    rank_start: str = attrs.field(converter=_to_rank, validator=_validate_rank)
    rank_end: str = attrs.field(converter=_to_rank, validator=_validate_rank)
    position_start: int = attrs.field(converter=_to_position, validator=_validate_position)
    position_end: int = attrs.field(converter=_to_position, validator=_validate_position)

    def __attrs_post_init__(self) -> None:
        if self.rank_start > self.rank_end:
            raise InvalidLayoutError(
                f'Invalid rank range: {self.rank_start} is after {self.rank_end}'
            )
        if self.position_start > self.position_end:
            raise InvalidLayoutError(
                f'Invalid position range: {self.position_start} > {self.position_end}'
            )

    @classmethod
    def parse(cls, descriptor: str, *, max_slots: Optional[int] = None) -> 'LayoutDescriptor':
        """Parse "A-F:1-50"; max_slots=None skips the ceiling (already-stored layouts)"""
        match = _DESCRIPTOR_PATTERN.match(descriptor or '')
        if match is None:
            raise InvalidLayoutError(
                f'Invalid layout descriptor {descriptor!r}, expected e.g. "A-F:1-50"'
            )

        layout = cls(**match.groupdict())  # converters handle str -> int
        if max_slots is not None:
            layout.ensure_within(max_slots=max_slots)
        return layout

    @classmethod
    def build(
        cls,
        *,
        rank_start: str,
        rank_end: str,
        position_start: int,
        position_end: int,
        max_slots: int,
    ) -> 'LayoutDescriptor':
        """Build from the four range bounds a creation form collects"""
        layout = cls(
            rank_start=rank_start,
            rank_end=rank_end,
            position_start=position_start,
            position_end=position_end,
        )
        layout.ensure_within(max_slots=max_slots)
        return layout

    def ensure_within(self, *, max_slots: int) -> None:
        if self.slot_count > max_slots:
            raise InvalidLayoutError(
                f'Too many locations ({self.slot_count}). Maximum is {max_slots:,}.'
            )

    @property
    def ranks(self) -> list[str]:
        return [chr(code) for code in range(ord(self.rank_start), ord(self.rank_end) + 1)]

    @property
    def positions(self) -> range:
        return range(self.position_start, self.position_end + 1)

    @property
    def slot_count(self) -> int:
        return len(self.ranks) * len(self.positions)

    def expand(self) -> list[str]:
        """All slot ids in row-major order (rank, then position)"""
        return [make_slot_id(rank, position) for rank in self.ranks for position in self.positions]

    def __str__(self) -> str:
        return f'{self.rank_start}-{self.rank_end}:{self.position_start}-{self.position_end}'
