from __future__ import annotations

from bettersetup.domain.models.character import ItemQuality
from bettersetup.domain.models.module_config import HostSettings, ModuleConfig
from bettersetup.domain.repositories import ConfigStore
from bettersetup.domain.services.tokenizer import normalize_token


CONF_SPEC_ENABLE = "PlayerbotBetterSetup.Spec.Enable"
CONF_REQUIRE_MASTER_CONTROL = "PlayerbotBetterSetup.Spec.RequireMasterControl"
CONF_SHOW_SPEC_LIST_ON_EMPTY = "PlayerbotBetterSetup.Spec.ShowSpecListOnEmpty"
CONF_AUTO_GEAR_RNDBOTS = "PlayerbotBetterSetup.Spec.AutoGearRndBots"
CONF_AUTO_GEAR_ALTBOTS = "PlayerbotBetterSetup.Spec.AutoGearAltBots"
CONF_GEAR_MODE_RNDBOTS = "PlayerbotBetterSetup.Spec.GearModeRndBots"
CONF_GEAR_MODE_ALTBOTS = "PlayerbotBetterSetup.Spec.GearModeAltBots"
CONF_GEAR_RATIO_RNDBOTS = "PlayerbotBetterSetup.Spec.GearMasterIlvlRatioRndBots"
CONF_GEAR_RATIO_ALTBOTS = "PlayerbotBetterSetup.Spec.GearMasterIlvlRatioAltBots"
CONF_EXPANSION_SOURCE = "PlayerbotBetterSetup.Spec.ExpansionSource"
CONF_GEAR_VALIDATION_LOWER_RATIO = "PlayerbotBetterSetup.Spec.GearValidationLowerRatio"
CONF_GEAR_VALIDATION_UPPER_RATIO = "PlayerbotBetterSetup.Spec.GearValidationUpperRatio"
CONF_GEAR_RETRY_COUNT = "PlayerbotBetterSetup.Spec.GearRetryCount"
CONF_GEAR_QUALITY_CAP_RATIO_MODE = "PlayerbotBetterSetup.Spec.GearQualityCapRatioMode"
CONF_GEAR_QUALITY_CAP_TOP_FOR_LEVEL = "PlayerbotBetterSetup.Spec.GearQualityCapTopForLevel"
CONF_LOGIN_DIAGNOSTICS_ENABLE = "PlayerbotBetterSetup.LoginDiagnostics.Enable"

CONF_COMMAND_SEPARATOR = "AiPlayerbot.CommandSeparator"
CONF_COMMAND_PREFIX = "AiPlayerbot.CommandPrefix"
CONF_LIMIT_TALENTS_EXPANSION = "AiPlayerbot.LimitTalentsExpansion"
CONF_MIN_ENCHANTING_BOT_LEVEL = "AiPlayerbot.MinEnchantingBotLevel"
CONF_INDIVIDUAL_PROGRESSION_ENABLE = "IndividualProgression.Enable"

GEAR_RETRY_MIN = 1
GEAR_RETRY_MAX = 20
MIN_VALIDATION_LOWER_RATIO = 0.01


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def load_module_config(store: ConfigStore) -> ModuleConfig:
    defaults = ModuleConfig()

    gear_ratio_rnd = store.get_float(CONF_GEAR_RATIO_RNDBOTS, defaults.gear_ratio_rnd_bots)
    gear_ratio_alt = store.get_float(CONF_GEAR_RATIO_ALTBOTS, defaults.gear_ratio_alt_bots)
    lower_ratio = store.get_float(CONF_GEAR_VALIDATION_LOWER_RATIO, defaults.gear_validation_lower_ratio)
    upper_ratio = store.get_float(CONF_GEAR_VALIDATION_UPPER_RATIO, defaults.gear_validation_upper_ratio)

    # Negative multipliers would ask the factory for negative item levels.
    gear_ratio_rnd = max(0.0, gear_ratio_rnd)
    gear_ratio_alt = max(0.0, gear_ratio_alt)
    if lower_ratio <= 0.0:
        lower_ratio = MIN_VALIDATION_LOWER_RATIO
    if upper_ratio < lower_ratio:
        upper_ratio = lower_ratio

    quality_low, quality_high = int(ItemQuality.NORMAL), int(ItemQuality.LEGENDARY)

    return ModuleConfig(
        enabled=store.get_bool(CONF_SPEC_ENABLE, defaults.enabled),
        require_master_control=store.get_bool(CONF_REQUIRE_MASTER_CONTROL, defaults.require_master_control),
        show_spec_list_on_empty=store.get_bool(CONF_SHOW_SPEC_LIST_ON_EMPTY, defaults.show_spec_list_on_empty),
        login_diagnostics_enabled=store.get_bool(CONF_LOGIN_DIAGNOSTICS_ENABLE, defaults.login_diagnostics_enabled),
        auto_gear_rnd_bots=store.get_bool(CONF_AUTO_GEAR_RNDBOTS, defaults.auto_gear_rnd_bots),
        auto_gear_alt_bots=store.get_bool(CONF_AUTO_GEAR_ALTBOTS, defaults.auto_gear_alt_bots),
        gear_mode_rnd_bots=normalize_token(store.get_string(CONF_GEAR_MODE_RNDBOTS, "master_ilvl_ratio")),
        gear_mode_alt_bots=normalize_token(store.get_string(CONF_GEAR_MODE_ALTBOTS, "master_ilvl_ratio")),
        gear_ratio_rnd_bots=gear_ratio_rnd,
        gear_ratio_alt_bots=gear_ratio_alt,
        expansion_source=normalize_token(store.get_string(CONF_EXPANSION_SOURCE, defaults.expansion_source)),
        gear_validation_lower_ratio=lower_ratio,
        gear_validation_upper_ratio=upper_ratio,
        gear_retry_count=_clamp(
            store.get_uint(CONF_GEAR_RETRY_COUNT, defaults.gear_retry_count), GEAR_RETRY_MIN, GEAR_RETRY_MAX
        ),
        gear_quality_cap_ratio_mode=_clamp(
            store.get_uint(CONF_GEAR_QUALITY_CAP_RATIO_MODE, defaults.gear_quality_cap_ratio_mode),
            quality_low,
            quality_high,
        ),
        gear_quality_cap_top_for_level=_clamp(
            store.get_uint(CONF_GEAR_QUALITY_CAP_TOP_FOR_LEVEL, defaults.gear_quality_cap_top_for_level),
            quality_low,
            quality_high,
        ),
    )


def load_host_settings(store: ConfigStore) -> HostSettings:
    defaults = HostSettings()
    return HostSettings(
        command_separator=store.get_string(CONF_COMMAND_SEPARATOR, defaults.command_separator),
        command_prefix=store.get_string(CONF_COMMAND_PREFIX, defaults.command_prefix),
        limit_talents_expansion=store.get_bool(CONF_LIMIT_TALENTS_EXPANSION, defaults.limit_talents_expansion),
        min_enchanting_bot_level=store.get_uint(CONF_MIN_ENCHANTING_BOT_LEVEL, defaults.min_enchanting_bot_level),
        individual_progression_enabled=store.get_bool(
            CONF_INDIVIDUAL_PROGRESSION_ENABLE, defaults.individual_progression_enabled
        ),
    )
