from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from bettersetup.domain.models.character import Character, EquippedItem


TalentEntry = Sequence[int]


class ConfigStore(ABC):
    @abstractmethod
    def get_bool(self, key: str, default: bool) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_float(self, key: str, default: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def get_uint(self, key: str, default: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_string(self, key: str, default: str) -> str:
        raise NotImplementedError


class CharacterSettingsRepository(ABC):
    @abstractmethod
    def read_setting(self, character_id: int, namespace: str) -> Optional[int]:
        raise NotImplementedError


class PremadeTemplateRepository(ABC):
    @abstractmethod
    def template_label(self, class_id: int, slot: int) -> str:
        """Free-text label of a premade slot; empty string when the slot is unused."""
        raise NotImplementedError

    @abstractmethod
    def talent_entries(self, class_id: int, slot: int, level: int) -> List[TalentEntry]:
        raise NotImplementedError


class EquipmentFactory(ABC):
    @abstractmethod
    def apply_talents_by_slot(self, bot: Character, slot: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def apply_talents_by_path(self, bot: Character, path: List[TalentEntry]) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_ammo(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_equipment(self, bot: Character, *, score_cap: int, quality_cap: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_ammo(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def apply_enchants_and_gems(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def repair_all(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_glyphs(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_glyphs(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_consumables(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_pet(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_pet_talents(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_class_spells(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_available_spells(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def init_special_spells(self, bot: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def compute_score_cap(self, item_level: int, quality_floor: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def equipped_items(self, character: Character) -> List[EquippedItem]:
        raise NotImplementedError

    @abstractmethod
    def average_item_level(self, character: Character) -> float:
        raise NotImplementedError


class BotControl(ABC):
    """Control layer attached to a bot-controlled character."""

    @property
    @abstractmethod
    def master_id(self) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def is_managed_bot(self) -> bool:
        """True for random/auto-populated and add-class bots, False for alt bots."""
        raise NotImplementedError

    @abstractmethod
    def check_level_for(self, sender: Character, *, silent: bool) -> bool:
        raise NotImplementedError

    @abstractmethod
    def filter_selectors(self, command_text: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def reset_strategies(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def tell_master(self, text: str) -> None:
        raise NotImplementedError


class BotDirectory(ABC):
    @abstractmethod
    def control_for(self, character: Character) -> Optional[BotControl]:
        raise NotImplementedError

    @abstractmethod
    def managed_bots_for(self, master: Character) -> List[Character]:
        raise NotImplementedError

    @abstractmethod
    def random_bots(self) -> List[Character]:
        raise NotImplementedError

    @abstractmethod
    def group_members(self, group_id: int) -> List[Character]:
        raise NotImplementedError

    @abstractmethod
    def is_in_channel(self, character: Character, channel_name: str) -> bool:
        raise NotImplementedError

    def is_bot_controlled(self, character: Character) -> bool:
        return self.control_for(character) is not None


class NotificationSink(ABC):
    @abstractmethod
    def send_system_message(self, recipient: Character, text: str) -> None:
        raise NotImplementedError
