from __future__ import annotations

import math
from collections.abc import Callable, Iterable

from bettersetup.domain.models.character import EquippedItem, ItemQuality, UNVALIDATED_EQUIPMENT_SLOTS
from bettersetup.domain.services.tokenizer import normalize_token


MASTER_RATIO_MODE = "masterilvlratio"
TOP_FOR_LEVEL_LABEL = "top_for_level"
NO_SCORE_LIMIT = 0
GEAR_SELF_MAX_ITERATIONS = 6


def is_master_ratio_mode(mode: str | None) -> bool:
    return normalize_token(mode) == MASTER_RATIO_MODE


def compute_master_target_average(master_average: float, ratio: float) -> float:
    """Target average item level scaled from the master; 0.0 means no valid target."""
    if master_average <= 0.0:
        return 0.0
    scaled = float(master_average) * float(ratio)
    if scaled <= 0.0:
        return 0.0
    return max(1.0, scaled)


def round_half_up(value: float) -> int:
    return int(math.floor(float(value) + 0.5))


def score_cap_for_target(target_average: float, compute_score_cap: Callable[[int, int], int]) -> int:
    if target_average <= 0.0:
        return NO_SCORE_LIMIT
    cap = int(compute_score_cap(round_half_up(target_average), int(ItemQuality.EPIC)))
    return cap if cap != 0 else 1


def item_within_band(item: EquippedItem, lower_bound: float, upper_bound: float) -> bool:
    if int(item.quality) <= int(ItemQuality.NORMAL):
        return False
    return lower_bound <= float(item.item_level) <= upper_bound


def gear_within_target_band(
    items: Iterable[EquippedItem],
    target_average: float,
    *,
    lower_ratio: float,
    upper_ratio: float,
) -> bool:
    if target_average <= 0.0:
        return True

    lower_bound = max(1.0, target_average * lower_ratio)
    upper_bound = target_average * upper_ratio
    for item in items:
        if item.slot in UNVALIDATED_EQUIPMENT_SLOTS:
            continue
        if not item_within_band(item, lower_bound, upper_bound):
            return False
    return True


def next_self_gear_cap(current_cap: int, target_level: int, current_average: int) -> int:
    """One proportional step of the self-gearing loop.

    The score-cap to average-item-level mapping depends on the live item pool,
    so it is steered iteratively instead of inverted.
    """
    next_cap = int(float(current_cap) * float(target_level) / float(current_average))
    if next_cap == current_cap:
        if current_average > target_level and next_cap > 1:
            next_cap -= 1
        elif current_average < target_level:
            next_cap += 1
    return max(1, next_cap)


def target_item_level_label(mode: str, ratio: float, master_average: float) -> str:
    if not is_master_ratio_mode(mode):
        return TOP_FOR_LEVEL_LABEL
    target = compute_master_target_average(master_average, ratio)
    if target <= 0.0:
        return f"{TOP_FOR_LEVEL_LABEL} (ratio fallback)"
    return str(int(target))
