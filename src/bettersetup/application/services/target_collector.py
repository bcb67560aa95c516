from __future__ import annotations

from collections.abc import Iterable

from bettersetup.domain.models.character import Character, ChatChannel
from bettersetup.domain.repositories import BotDirectory


class TargetCollector:
    """Gathers the bots addressed by one chat scope, each at most once."""

    def __init__(self, directory: BotDirectory) -> None:
        self._directory = directory

    def _append_unique(self, bots: list[Character], seen: set[int], candidates: Iterable[Character], predicate=None) -> None:
        for bot in candidates:
            if bot is None or not self._directory.is_bot_controlled(bot):
                continue
            if predicate is not None and not predicate(bot):
                continue
            if bot.id in seen:
                continue
            seen.add(bot.id)
            bots.append(bot)

    def direct(self, receiver: Character | None) -> list[Character]:
        if receiver is None or not self._directory.is_bot_controlled(receiver):
            return []
        return [receiver]

    def group(self, group_id: int | None) -> list[Character]:
        if group_id is None:
            return []
        bots: list[Character] = []
        self._append_unique(bots, set(), self._directory.group_members(group_id))
        return bots

    def guild(self, sender: Character) -> list[Character]:
        if not sender.guild_id:
            return []
        bots: list[Character] = []
        self._append_unique(
            bots,
            set(),
            self._directory.managed_bots_for(sender),
            predicate=lambda bot: bot.guild_id == sender.guild_id,
        )
        return bots

    def channel(self, sender: Character, channel: ChatChannel | None) -> list[Character]:
        if channel is None:
            return []

        bots: list[Character] = []
        seen: set[int] = set()

        def _joined(bot: Character) -> bool:
            return self._directory.is_in_channel(bot, channel.name)

        if channel.is_general_or_trade:
            self._append_unique(bots, seen, self._directory.managed_bots_for(sender), predicate=_joined)
        self._append_unique(bots, seen, self._directory.random_bots(), predicate=_joined)
        return bots
