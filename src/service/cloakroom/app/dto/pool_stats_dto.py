import attrs


@attrs.frozen
class PoolStats:
    available_count: int
    occupied_count: int
    total_count: int
    percent_occupied: float

    @classmethod
    def from_counts(cls, *, available: int, occupied: int) -> 'PoolStats':
        total = available + occupied
        percent = round(occupied / total * 100, 1) if total > 0 else 0.0
        return cls(
            available_count=available,
            occupied_count=occupied,
            total_count=total,
            percent_occupied=percent,
        )
