from __future__ import annotations

from collections.abc import Callable

from bettersetup.domain.models.expansion import ExpansionCap


PROGRESSION_SETTING_NAMESPACE = "mod-individual-progression"

VANILLA_MAX_LEVEL = 60
TBC_MAX_LEVEL = 70
VANILLA_MAX_PROGRESSION_TIER = 7
TBC_MAX_PROGRESSION_TIER = 12
# Progression tiers are stored as a single byte; larger values wrap.
PROGRESSION_TIER_MASK = 0xFF

SOURCE_LEVEL = "level"
SOURCE_PROGRESSION = "progression"
SOURCE_AUTO = "auto"

# Highest legal talent row per tier; on that row only the centre column (1) is allowed.
_ROW_LIMITS = {
    ExpansionCap.VANILLA: 6,
    ExpansionCap.TBC: 8,
}
CAPSTONE_COLUMN = 1


def level_based_cap(level: int) -> ExpansionCap:
    if int(level) <= VANILLA_MAX_LEVEL:
        return ExpansionCap.VANILLA
    if int(level) <= TBC_MAX_LEVEL:
        return ExpansionCap.TBC
    return ExpansionCap.WRATH


def narrow_progression_tier(value: int | None) -> int | None:
    if value is None:
        return None
    return int(value) & PROGRESSION_TIER_MASK


def progression_based_cap(tier: int) -> ExpansionCap:
    if int(tier) <= VANILLA_MAX_PROGRESSION_TIER:
        return ExpansionCap.VANILLA
    if int(tier) <= TBC_MAX_PROGRESSION_TIER:
        return ExpansionCap.TBC
    return ExpansionCap.WRATH


def resolve_expansion_cap(
    *,
    level: int,
    source_mode: str,
    limit_talents_expansion: bool,
    progression_lookup: Callable[[], int | None] | None = None,
) -> ExpansionCap:
    if not limit_talents_expansion:
        return ExpansionCap.WRATH

    if source_mode in (SOURCE_PROGRESSION, SOURCE_AUTO) and progression_lookup is not None:
        tier = progression_lookup()
        if tier is not None:
            return progression_based_cap(tier)

    # Unknown modes fall back to level bands as well.
    return level_based_cap(level)


def is_allowed_talent_node(cap: ExpansionCap, row: int, column: int) -> bool:
    row_limit = _ROW_LIMITS.get(cap)
    if row_limit is None:
        return True
    if row > row_limit:
        return False
    return not (row == row_limit and column != CAPSTONE_COLUMN)
