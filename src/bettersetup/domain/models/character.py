from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ItemQuality(IntEnum):
    POOR = 0
    NORMAL = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5


EQUIPMENT_SLOT_COUNT = 19
EQUIPMENT_SLOT_BODY = 3
EQUIPMENT_SLOT_TABARD = 18
UNVALIDATED_EQUIPMENT_SLOTS = frozenset({EQUIPMENT_SLOT_BODY, EQUIPMENT_SLOT_TABARD})

SECURITY_PLAYER = 0
SECURITY_GAMEMASTER = 2


class ChatType(Enum):
    SAY = "say"
    YELL = "yell"
    WHISPER = "whisper"
    PARTY = "party"
    RAID = "raid"
    GUILD = "guild"
    OFFICER = "officer"
    CHANNEL = "channel"


@dataclass(frozen=True)
class Character:
    """The handful of host character fields the command engine reads."""

    id: int
    name: str
    class_id: int
    level: int = 1
    guild_id: int = 0
    security: int = SECURITY_PLAYER

    def __post_init__(self) -> None:
        if int(self.level) < 1:
            raise ValueError("Level must be at least 1")

    @property
    def is_elevated(self) -> bool:
        return int(self.security) >= SECURITY_GAMEMASTER


@dataclass(frozen=True)
class EquippedItem:
    slot: int
    item_level: int
    quality: int
    entry: int = 0


# General (0x08) and trade (0x10) channel flags.
GENERAL_OR_TRADE_CHANNEL_FLAGS = 0x18


@dataclass(frozen=True)
class ChatChannel:
    name: str
    flags: int = 0

    @property
    def is_general_or_trade(self) -> bool:
        return bool(int(self.flags) & GENERAL_OR_TRADE_CHANNEL_FLAGS)
