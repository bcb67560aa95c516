from __future__ import annotations

import logging

from bettersetup.domain.models.character import Character
from bettersetup.domain.models.expansion import ExpansionCap
from bettersetup.domain.repositories import EquipmentFactory, PremadeTemplateRepository
from bettersetup.domain.services.talent_path import build_talent_path, filter_talent_path


class TalentService:
    def __init__(self, factory: EquipmentFactory, templates: PremadeTemplateRepository) -> None:
        self._factory = factory
        self._templates = templates
        self._logger = logging.getLogger(__name__)

    def apply_spec_talents(self, bot: Character, template_slot: int, cap: ExpansionCap) -> bool:
        """Apply the premade path for the slot, filtered by the expansion cap.

        Returns True when the filtered path was used and False when the legacy
        whole-template initializer ran instead. Either way talents are applied.
        """
        path = build_talent_path(
            lambda level: self._templates.talent_entries(bot.class_id, template_slot, level),
            bot.level,
        )
        filtered = filter_talent_path(path, cap) if path else []

        if not filtered:
            self._logger.debug(
                "Talent path empty after filtering; using slot initializer",
                extra={"bot_id": bot.id, "template_slot": template_slot, "raw_entries": len(path)},
            )
            self._factory.apply_talents_by_slot(bot, template_slot)
            return False

        self._factory.apply_talents_by_path(bot, filtered)
        return True

    def run_post_spec_refresh(self, bot: Character, cap: ExpansionCap, *, limit_talents_expansion: bool) -> None:
        glyphs_supported = cap.supports_glyphs or not limit_talents_expansion

        if glyphs_supported:
            self._factory.init_glyphs(bot)
        else:
            self._factory.clear_glyphs(bot)

        self._factory.init_consumables(bot)
        self._factory.init_pet(bot)

        if glyphs_supported:
            self._factory.init_pet_talents(bot)

        self._factory.init_class_spells(bot)
        self._factory.init_available_spells(bot)
        self._factory.init_special_spells(bot)
