from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from bettersetup.domain.models.character import (
    EQUIPMENT_SLOT_COUNT,
    SECURITY_GAMEMASTER,
    Character,
    ChatChannel,
    EquippedItem,
    ItemQuality,
)
from bettersetup.domain.services.expansion_cap import PROGRESSION_SETTING_NAMESPACE
from bettersetup.domain.services.spec_catalog import CLASS_SPEC_CATALOG
from bettersetup.infrastructure.inmemory.inmemory_bot_directory import InMemoryBotDirectory, RecordingNotifier
from bettersetup.infrastructure.inmemory.inmemory_equipment_factory import InMemoryEquipmentFactory
from bettersetup.infrastructure.inmemory.inmemory_settings_repo import InMemoryCharacterSettingsRepository
from bettersetup.infrastructure.inmemory.inmemory_template_repo import InMemoryPremadeTemplateRepository


DEMO_GROUP_ID = 1
DEMO_GUILD_ID = 7

DEMO_CHANNELS: Dict[str, ChatChannel] = {
    "general": ChatChannel(name="General", flags=0x08),
    "trade": ChatChannel(name="Trade", flags=0x10),
    "lookingforgroup": ChatChannel(name="LookingForGroup", flags=0x00),
}


@dataclass
class DemoHost:
    directory: InMemoryBotDirectory
    notifier: RecordingNotifier
    factory: InMemoryEquipmentFactory
    templates: InMemoryPremadeTemplateRepository
    settings_repo: InMemoryCharacterSettingsRepository
    group_id: int = DEMO_GROUP_ID
    channels: Dict[str, ChatChannel] = field(default_factory=lambda: dict(DEMO_CHANNELS))


def _template_labels(class_id: int) -> list[str]:
    """One PvE label per catalog spec at its first preferred slot, then a PvP row."""
    profile = CLASS_SPEC_CATALOG[class_id]
    labels: Dict[int, str] = {}
    for spec in profile.specs:
        labels.setdefault(spec.preferred_indexes[0], f"{spec.match_tokens[0]} pve")

    # An empty label ends the slot scan, so gaps are filled.
    filler = f"{profile.specs[0].match_tokens[0]} pvp"
    ordered = [labels.get(slot, filler) for slot in range(max(labels) + 1)]
    return ordered + [filler]


def _seed_talents(templates: InMemoryPremadeTemplateRepository, class_id: int, slot_count: int) -> None:
    # One point per level from 10, eleven rows deep by level 80.
    for slot in range(slot_count):
        tab = slot % 3
        for level in range(10, 81):
            row = min(10, (level - 10) // 7)
            column = level % 3
            templates.add_talent_entry(class_id, slot, level, (tab, row, column, 1))


def build_demo_templates() -> InMemoryPremadeTemplateRepository:
    templates = InMemoryPremadeTemplateRepository()
    for class_id in CLASS_SPEC_CATALOG:
        labels = _template_labels(class_id)
        templates.set_labels(class_id, labels)
        _seed_talents(templates, class_id, len(labels))
    return templates


def build_demo_host() -> DemoHost:
    notifier = RecordingNotifier()
    directory = InMemoryBotDirectory(notifier)
    factory = InMemoryEquipmentFactory()
    settings_repo = InMemoryCharacterSettingsRepository()

    aldric = directory.add_player(Character(id=1, name="Aldric", class_id=1, level=80, guild_id=DEMO_GUILD_ID))
    directory.add_player(Character(id=2, name="Overseer", class_id=2, level=60, security=SECURITY_GAMEMASTER))

    brannoc = Character(id=101, name="Brannoc", class_id=1, level=80, guild_id=DEMO_GUILD_ID)
    celyse = Character(id=102, name="Celyse", class_id=5, level=80, guild_id=DEMO_GUILD_ID)
    durnhal = Character(id=201, name="Durnhal", class_id=6, level=80)
    elowen = Character(id=202, name="Elowen", class_id=11, level=70)
    fennick = Character(id=203, name="Fennick", class_id=3, level=58)

    directory.add_bot(brannoc, master=aldric, managed=False)
    directory.add_bot(celyse, master=aldric, managed=True)
    directory.add_bot(durnhal, random=True)
    directory.add_bot(elowen, random=True, owner_only=True)
    directory.add_bot(fennick, random=True)

    directory.add_to_group(DEMO_GROUP_ID, aldric, brannoc, celyse)
    directory.join_channel("General", aldric, celyse, durnhal)
    directory.join_channel("Trade", aldric, fennick)
    directory.join_channel("LookingForGroup", elowen, durnhal)

    factory.equip(
        aldric,
        [
            EquippedItem(slot=slot, item_level=200, quality=int(ItemQuality.EPIC), entry=50000 + slot)
            for slot in range(EQUIPMENT_SLOT_COUNT)
        ],
    )
    settings_repo.write_setting(aldric.id, PROGRESSION_SETTING_NAMESPACE, 13)

    return DemoHost(
        directory=directory,
        notifier=notifier,
        factory=factory,
        templates=build_demo_templates(),
        settings_repo=settings_repo,
    )
