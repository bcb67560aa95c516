from __future__ import annotations

from bettersetup.application.dtos import LoginDiagnosticsView
from bettersetup.application.services.config_loader import load_host_settings, load_module_config
from bettersetup.domain.models.character import Character
from bettersetup.domain.repositories import (
    CharacterSettingsRepository,
    ConfigStore,
    EquipmentFactory,
    NotificationSink,
)
from bettersetup.domain.services.expansion_cap import (
    PROGRESSION_SETTING_NAMESPACE,
    SOURCE_AUTO,
    SOURCE_PROGRESSION,
    narrow_progression_tier,
    resolve_expansion_cap,
)
from bettersetup.domain.services.gear_policy import target_item_level_label


_HIGHLIGHT = "|cff00ff00"
_RESET = "|r"


def _describe_expansion_source(source_mode: str, limit_talents_expansion: bool, tier: int | None) -> str:
    if not limit_talents_expansion:
        return "(AiPlayerbot.LimitTalentsExpansion=0)"
    if source_mode == SOURCE_PROGRESSION:
        if tier is not None:
            return f"(progression tier {tier})"
        return "(progression tier missing, level fallback)"
    if source_mode == SOURCE_AUTO:
        if tier is not None:
            return f"(auto -> progression tier {tier})"
        return "(auto -> level fallback)"
    return "(level source)"


class LoginDiagnosticsService:
    def __init__(
        self,
        *,
        config_store: ConfigStore,
        settings_repo: CharacterSettingsRepository,
        factory: EquipmentFactory,
        notifier: NotificationSink,
    ) -> None:
        self._config_store = config_store
        self._settings_repo = settings_repo
        self._factory = factory
        self._notifier = notifier

    def build(self, player: Character) -> LoginDiagnosticsView:
        config = load_module_config(self._config_store)
        if not config.login_diagnostics_enabled:
            return LoginDiagnosticsView()
        settings = load_host_settings(self._config_store)

        tier = narrow_progression_tier(self._settings_repo.read_setting(player.id, PROGRESSION_SETTING_NAMESPACE))
        cap = resolve_expansion_cap(
            level=player.level,
            source_mode=config.expansion_source,
            limit_talents_expansion=settings.limit_talents_expansion,
            progression_lookup=lambda: tier,
        )
        source = _describe_expansion_source(config.expansion_source, settings.limit_talents_expansion, tier)

        master_average = self._factory.average_item_level(player)
        rnd_target = target_item_level_label(config.gear_mode_rnd_bots, config.gear_ratio_rnd_bots, master_average)
        alt_target = target_item_level_label(config.gear_mode_alt_bots, config.gear_ratio_alt_bots, master_average)
        progression_state = "loaded" if settings.individual_progression_enabled else "not loaded/disabled"

        return LoginDiagnosticsView(
            lines=[
                f"{_HIGHLIGHT}mod-playerbot-bettersetup:{_RESET} loaded",
                f"{_HIGHLIGHT}Individual Progression:{_RESET} {progression_state}",
                f"{_HIGHLIGHT}Expansion used to determine gear:{_RESET} {cap.label} {source}",
                f"{_HIGHLIGHT}Master average ilvl:{_RESET} {int(master_average)}",
                f"{_HIGHLIGHT}Bot target ilvl (rnd/alt):{_RESET} {rnd_target} / {alt_target}",
            ]
        )

    def send(self, player: Character) -> LoginDiagnosticsView:
        view = self.build(player)
        for line in view.lines:
            self._notifier.send_system_message(player, line)
        return view
