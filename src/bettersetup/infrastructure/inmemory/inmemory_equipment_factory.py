from __future__ import annotations

from typing import Dict, List, Tuple

from bettersetup.domain.models.character import (
    EQUIPMENT_SLOT_COUNT,
    UNVALIDATED_EQUIPMENT_SLOTS,
    Character,
    EquippedItem,
    ItemQuality,
)
from bettersetup.domain.repositories import EquipmentFactory, TalentEntry


# Score weight per quality; an item's score is item_level * weight.
QUALITY_SCORE_WEIGHTS: Dict[int, int] = {
    int(ItemQuality.POOR): 1,
    int(ItemQuality.NORMAL): 2,
    int(ItemQuality.UNCOMMON): 3,
    int(ItemQuality.RARE): 4,
    int(ItemQuality.EPIC): 5,
    int(ItemQuality.LEGENDARY): 6,
}

# The simulated loot table never drops legendaries.
POOL_QUALITIES: Tuple[int, ...] = (
    int(ItemQuality.NORMAL),
    int(ItemQuality.UNCOMMON),
    int(ItemQuality.RARE),
    int(ItemQuality.EPIC),
)

COSMETIC_ITEM_LEVEL = 1


def max_item_level_for_level(level: int) -> int:
    level = max(1, int(level))
    if level <= 60:
        return level + 5
    if level <= 70:
        return 65 + (level - 60) * 10
    return 165 + (min(level, 80) - 70) * 12


def item_score(item_level: int, quality: int) -> int:
    return int(item_level) * QUALITY_SCORE_WEIGHTS.get(int(quality), 1)


class InMemoryEquipmentFactory(EquipmentFactory):
    """Simulated host item factory.

    Each slot receives the highest scoring item allowed by the score cap
    (0 means unlimited), the quality ceiling and the wearer's level. Every
    mutating call is recorded in ``calls`` as ``(operation, character_id)``.
    """

    def __init__(self) -> None:
        self._equipment: Dict[int, Dict[int, EquippedItem]] = {}
        self._talent_paths: Dict[int, List[Tuple[int, ...]]] = {}
        self._talent_slots: Dict[int, int] = {}
        self._glyphs: Dict[int, bool] = {}
        self.calls: List[Tuple[str, int]] = []

    def _record(self, operation: str, character: Character) -> None:
        self.calls.append((operation, character.id))

    def calls_for(self, character: Character) -> List[str]:
        return [operation for operation, character_id in self.calls if character_id == character.id]

    def apply_talents_by_slot(self, bot: Character, slot: int) -> None:
        self._record("talents_by_slot", bot)
        self._talent_paths.pop(bot.id, None)
        self._talent_slots[bot.id] = int(slot)

    def apply_talents_by_path(self, bot: Character, path: List[TalentEntry]) -> None:
        self._record("talents_by_path", bot)
        self._talent_slots.pop(bot.id, None)
        self._talent_paths[bot.id] = [tuple(entry) for entry in path]

    def talent_path(self, character: Character) -> List[Tuple[int, ...]]:
        return list(self._talent_paths.get(character.id, []))

    def talent_slot(self, character: Character) -> int | None:
        return self._talent_slots.get(character.id)

    def has_glyphs(self, character: Character) -> bool:
        return self._glyphs.get(character.id, False)

    def clear_ammo(self, bot: Character) -> None:
        self._record("clear_ammo", bot)

    def _best_item(self, slot: int, level: int, score_cap: int, quality_cap: int) -> EquippedItem | None:
        level_limit = max_item_level_for_level(level)
        best: Tuple[int, int, int] | None = None
        for quality in POOL_QUALITIES:
            if quality > int(quality_cap):
                continue
            weight = QUALITY_SCORE_WEIGHTS[quality]
            item_level = level_limit if score_cap <= 0 else min(level_limit, int(score_cap) // weight)
            if item_level < 1:
                continue
            candidate = (item_score(item_level, quality), quality, item_level)
            if best is None or candidate > best:
                best = candidate
        if best is None:
            return None
        _, quality, item_level = best
        return EquippedItem(slot=slot, item_level=item_level, quality=quality, entry=slot * 1000 + item_level)

    def init_equipment(self, bot: Character, *, score_cap: int, quality_cap: int) -> None:
        self._record("init_equipment", bot)
        equipped: Dict[int, EquippedItem] = {}
        for slot in range(EQUIPMENT_SLOT_COUNT):
            if slot in UNVALIDATED_EQUIPMENT_SLOTS:
                equipped[slot] = EquippedItem(slot=slot, item_level=COSMETIC_ITEM_LEVEL, quality=int(ItemQuality.NORMAL))
                continue
            item = self._best_item(slot, bot.level, int(score_cap), int(quality_cap))
            if item is not None:
                equipped[slot] = item
        self._equipment[bot.id] = equipped

    def equip(self, character: Character, items: List[EquippedItem]) -> None:
        self._equipment[character.id] = {item.slot: item for item in items}

    def init_ammo(self, bot: Character) -> None:
        self._record("init_ammo", bot)

    def apply_enchants_and_gems(self, bot: Character) -> None:
        self._record("enchants_and_gems", bot)

    def repair_all(self, bot: Character) -> None:
        self._record("repair_all", bot)

    def init_glyphs(self, bot: Character) -> None:
        self._record("init_glyphs", bot)
        self._glyphs[bot.id] = True

    def clear_glyphs(self, bot: Character) -> None:
        self._record("clear_glyphs", bot)
        self._glyphs[bot.id] = False

    def init_consumables(self, bot: Character) -> None:
        self._record("init_consumables", bot)

    def init_pet(self, bot: Character) -> None:
        self._record("init_pet", bot)

    def init_pet_talents(self, bot: Character) -> None:
        self._record("init_pet_talents", bot)

    def init_class_spells(self, bot: Character) -> None:
        self._record("init_class_spells", bot)

    def init_available_spells(self, bot: Character) -> None:
        self._record("init_available_spells", bot)

    def init_special_spells(self, bot: Character) -> None:
        self._record("init_special_spells", bot)

    def compute_score_cap(self, item_level: int, quality_floor: int) -> int:
        return max(0, item_score(int(item_level), int(quality_floor)))

    def equipped_items(self, character: Character) -> List[EquippedItem]:
        equipped = self._equipment.get(character.id, {})
        return [equipped[slot] for slot in sorted(equipped)]

    def average_item_level(self, character: Character) -> float:
        levels = [
            item.item_level
            for item in self.equipped_items(character)
            if item.slot not in UNVALIDATED_EQUIPMENT_SLOTS
        ]
        if not levels:
            return 0.0
        return sum(levels) / len(levels)
