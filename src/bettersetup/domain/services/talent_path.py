from __future__ import annotations

from collections.abc import Callable, Sequence

from bettersetup.domain.models.expansion import ExpansionCap
from bettersetup.domain.services.expansion_cap import is_allowed_talent_node


TALENT_PATH_MIN_LEVEL = 1
TALENT_PATH_MAX_LEVEL = 80
MIN_TALENT_ENTRY_FIELDS = 4


def build_talent_path(
    entries_for_level: Callable[[int], Sequence[Sequence[int]]],
    level: int,
) -> list[tuple[int, ...]]:
    """Replay premade talent entries from the nearest populated level up to 80.

    Premade trees are defined incrementally per level, so a character between
    two populated levels starts from the lower one.
    """
    start = max(TALENT_PATH_MIN_LEVEL, min(TALENT_PATH_MAX_LEVEL, int(level)))
    while TALENT_PATH_MIN_LEVEL < start < TALENT_PATH_MAX_LEVEL and not entries_for_level(start):
        start -= 1

    path: list[tuple[int, ...]] = []
    for current in range(start, TALENT_PATH_MAX_LEVEL + 1):
        for entry in entries_for_level(current) or ():
            path.append(tuple(int(value) for value in entry))
    return path


def filter_talent_path(path: Sequence[Sequence[int]], cap: ExpansionCap) -> list[tuple[int, ...]]:
    filtered: list[tuple[int, ...]] = []
    for entry in path:
        if len(entry) < MIN_TALENT_ENTRY_FIELDS:
            continue
        row, column = int(entry[1]), int(entry[2])
        if not is_allowed_talent_node(cap, row, column):
            continue
        filtered.append(tuple(entry))
    return filtered
