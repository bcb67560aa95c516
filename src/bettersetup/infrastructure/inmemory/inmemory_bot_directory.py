from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from bettersetup.domain.models.character import Character
from bettersetup.domain.repositories import BotControl, BotDirectory, NotificationSink
from bettersetup.domain.services.spec_catalog import class_id_for_name
from bettersetup.domain.services.tokenizer import normalize_token, split_words


SELECTOR_MARKER = "@"


class RecordingNotifier(NotificationSink):
    def __init__(self) -> None:
        self.messages: List[Tuple[int, str]] = []

    def send_system_message(self, recipient: Character, text: str) -> None:
        self.messages.append((recipient.id, text))

    def messages_for(self, recipient: Character) -> List[str]:
        return [text for recipient_id, text in self.messages if recipient_id == recipient.id]

    def clear(self) -> None:
        self.messages.clear()


class InMemoryBotControl(BotControl):
    """Playerbot control layer of one simulated bot.

    ``@name`` and ``@class`` prefixes on a command address a subset of bots;
    a bot that is not addressed sees an empty command.
    """

    def __init__(
        self,
        bot: Character,
        *,
        master: Character | None = None,
        managed: bool = True,
        owner_only: bool = False,
        notifier: NotificationSink | None = None,
    ) -> None:
        self._bot = bot
        self._master = master
        self._managed = managed
        self._owner_only = owner_only
        self._notifier = notifier
        self.told: List[str] = []
        self.strategy_resets = 0

    @property
    def bot(self) -> Character:
        return self._bot

    @property
    def master(self) -> Character | None:
        return self._master

    @property
    def master_id(self) -> Optional[int]:
        return self._master.id if self._master is not None else None

    def is_managed_bot(self) -> bool:
        return self._managed

    def check_level_for(self, sender: Character, *, silent: bool) -> bool:
        if not self._owner_only or sender.is_elevated or sender.id == self.master_id:
            return True
        if not silent and self._notifier is not None:
            self._notifier.send_system_message(sender, f"{self._bot.name}: I will not take orders from you.")
        return False

    def _selector_matches(self, selector: str) -> bool:
        wanted = normalize_token(selector)
        if not wanted:
            return True
        return wanted == normalize_token(self._bot.name) or class_id_for_name(wanted) == self._bot.class_id

    def filter_selectors(self, command_text: str) -> str:
        words = split_words(command_text)
        index = 0
        while index < len(words) and words[index].startswith(SELECTOR_MARKER):
            if not self._selector_matches(words[index][len(SELECTOR_MARKER):]):
                return ""
            index += 1
        if index == 0:
            return command_text
        return " ".join(words[index:])

    def reset_strategies(self) -> None:
        self.strategy_resets += 1

    def tell_master(self, text: str) -> None:
        self.told.append(text)
        if self._master is not None and self._notifier is not None:
            self._notifier.send_system_message(self._master, text)


class InMemoryBotDirectory(BotDirectory):
    def __init__(self, notifier: NotificationSink | None = None) -> None:
        self._notifier = notifier
        self._characters: Dict[int, Character] = {}
        self._controls: Dict[int, InMemoryBotControl] = {}
        self._random_bot_ids: List[int] = []
        self._groups: Dict[int, List[int]] = {}
        self._channels: Dict[str, Set[int]] = {}

    def add_player(self, character: Character) -> Character:
        self._characters[character.id] = character
        return character

    def add_bot(
        self,
        bot: Character,
        *,
        master: Character | None = None,
        managed: bool = True,
        random: bool = False,
        owner_only: bool = False,
    ) -> InMemoryBotControl:
        self._characters[bot.id] = bot
        control = InMemoryBotControl(
            bot,
            master=master,
            managed=managed,
            owner_only=owner_only,
            notifier=self._notifier,
        )
        self._controls[bot.id] = control
        if random and bot.id not in self._random_bot_ids:
            self._random_bot_ids.append(bot.id)
        return control

    def add_to_group(self, group_id: int, *members: Character) -> None:
        roster = self._groups.setdefault(int(group_id), [])
        for member in members:
            if member.id not in roster:
                roster.append(member.id)

    def join_channel(self, channel_name: str, *members: Character) -> None:
        joined = self._channels.setdefault(normalize_token(channel_name), set())
        joined.update(member.id for member in members)

    def find_by_name(self, name: str) -> Character | None:
        wanted = normalize_token(name)
        for character in self._characters.values():
            if normalize_token(character.name) == wanted:
                return character
        return None

    def characters(self) -> List[Character]:
        return list(self._characters.values())

    def control_for(self, character: Character) -> Optional[InMemoryBotControl]:
        if character is None:
            return None
        return self._controls.get(character.id)

    def managed_bots_for(self, master: Character) -> List[Character]:
        return [
            self._characters[bot_id]
            for bot_id, control in self._controls.items()
            if control.master_id == master.id
        ]

    def random_bots(self) -> List[Character]:
        return [self._characters[bot_id] for bot_id in self._random_bot_ids]

    def group_members(self, group_id: int) -> List[Character]:
        return [self._characters[member_id] for member_id in self._groups.get(int(group_id), [])]

    def is_in_channel(self, character: Character, channel_name: str) -> bool:
        return character.id in self._channels.get(normalize_token(channel_name), set())
