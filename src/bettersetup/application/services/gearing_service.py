from __future__ import annotations

import logging

from bettersetup.application.dtos import GearOutcome, GearSelfOutcome
from bettersetup.domain.events import GearSelfCompletedEvent
from bettersetup.domain.models.character import Character, ItemQuality
from bettersetup.domain.models.module_config import HostSettings, ModuleConfig
from bettersetup.domain.repositories import BotControl, EquipmentFactory
from bettersetup.domain.services.gear_policy import (
    GEAR_SELF_MAX_ITERATIONS,
    NO_SCORE_LIMIT,
    compute_master_target_average,
    gear_within_target_band,
    is_master_ratio_mode,
    next_self_gear_cap,
    score_cap_for_target,
)


class GearingService:
    def __init__(self, factory: EquipmentFactory, *, event_publisher=None) -> None:
        self._factory = factory
        self._event_publisher = event_publisher
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def should_auto_gear(control: BotControl, gear_requested: bool, config: ModuleConfig) -> bool:
        # Managed bots follow the config toggle; alt bots are opt-in per command.
        if control.is_managed_bot():
            return config.auto_gear_rnd_bots
        return config.auto_gear_alt_bots and gear_requested

    def run_gear_pass(self, bot: Character, *, score_cap: int, quality_cap: int, settings: HostSettings) -> None:
        self._factory.init_equipment(bot, score_cap=score_cap, quality_cap=quality_cap)
        self._factory.init_ammo(bot)
        if bot.level >= settings.min_enchanting_bot_level:
            self._factory.apply_enchants_and_gems(bot)
        self._factory.repair_all(bot)

    def apply_auto_gear(
        self,
        bot: Character,
        control: BotControl,
        master: Character | None,
        config: ModuleConfig,
        settings: HostSettings,
    ) -> GearOutcome:
        mode, ratio = config.gear_policy_for(managed_bot=control.is_managed_bot())

        if is_master_ratio_mode(mode):
            master_average = self._factory.average_item_level(master) if master is not None else 0.0
            target = compute_master_target_average(master_average, ratio)
            score_cap = score_cap_for_target(target, self._factory.compute_score_cap)

            if target > 0.0 and score_cap != NO_SCORE_LIMIT:
                outcome = GearOutcome(mode="master_ratio", target_average=target, score_cap=score_cap)
                for attempt in range(1, config.gear_retry_count + 1):
                    self._factory.clear_ammo(bot)
                    self.run_gear_pass(
                        bot,
                        score_cap=score_cap,
                        quality_cap=config.gear_quality_cap_ratio_mode,
                        settings=settings,
                    )
                    outcome.attempts = attempt
                    if gear_within_target_band(
                        self._factory.equipped_items(bot),
                        target,
                        lower_ratio=config.gear_validation_lower_ratio,
                        upper_ratio=config.gear_validation_upper_ratio,
                    ):
                        outcome.within_band = True
                        break

                self._logger.debug(
                    "Ratio gearing finished",
                    extra={
                        "bot_id": bot.id,
                        "target": target,
                        "score_cap": score_cap,
                        "attempts": outcome.attempts,
                        "within_band": outcome.within_band,
                    },
                )
                return outcome

        self._factory.clear_ammo(bot)
        self.run_gear_pass(
            bot,
            score_cap=NO_SCORE_LIMIT,
            quality_cap=config.gear_quality_cap_top_for_level,
            settings=settings,
        )
        return GearOutcome(mode="top_for_level", attempts=1, within_band=True)

    def apply_gear_self(self, character: Character, settings: HostSettings) -> GearSelfOutcome:
        target = int(character.level)
        score_cap = int(self._factory.compute_score_cap(target, int(ItemQuality.NORMAL)))
        used_cap = score_cap
        iterations = 0

        for iterations in range(1, GEAR_SELF_MAX_ITERATIONS + 1):
            used_cap = score_cap
            self.run_gear_pass(
                character,
                score_cap=score_cap,
                quality_cap=int(ItemQuality.LEGENDARY),
                settings=settings,
            )
            current = int(self._factory.average_item_level(character))
            if current == target or current == 0:
                break
            score_cap = next_self_gear_cap(score_cap, target, current)

        outcome = GearSelfOutcome(
            target_item_level=target,
            achieved_item_level=int(self._factory.average_item_level(character)),
            final_score_cap=used_cap,
            iterations=iterations,
        )
        if self._event_publisher is not None:
            self._event_publisher(
                GearSelfCompletedEvent(
                    character_id=character.id,
                    target_item_level=outcome.target_item_level,
                    achieved_item_level=outcome.achieved_item_level,
                    iterations=outcome.iterations,
                )
            )
        return outcome
