from dataclasses import dataclass

# ===== Board event structures =====
# Coordinates are always in the real board frame.


@dataclass(frozen=True)
class MoveEvent:
    value: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int


@dataclass(frozen=True)
class MergeEvent:
    old_value: int
    new_value: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int


@dataclass(frozen=True)
class SpawnEvent:
    value: int
    row: int
    col: int
