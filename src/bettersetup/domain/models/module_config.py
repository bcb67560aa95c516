from __future__ import annotations

from dataclasses import dataclass

from bettersetup.domain.models.character import ItemQuality


@dataclass(frozen=True)
class ModuleConfig:
    """Policy knobs read once per incoming chat event.

    Every bot addressed by one message is evaluated under the same instance,
    so edits to the backing store only take effect on the next message.
    """

    enabled: bool = True
    require_master_control: bool = True
    show_spec_list_on_empty: bool = True
    login_diagnostics_enabled: bool = True

    auto_gear_rnd_bots: bool = True
    auto_gear_alt_bots: bool = False

    gear_mode_rnd_bots: str = "masterilvlratio"
    gear_mode_alt_bots: str = "masterilvlratio"
    gear_ratio_rnd_bots: float = 1.0
    gear_ratio_alt_bots: float = 1.0

    expansion_source: str = "auto"
    gear_validation_lower_ratio: float = 0.85
    gear_validation_upper_ratio: float = 1.15
    gear_retry_count: int = 4
    gear_quality_cap_ratio_mode: int = int(ItemQuality.EPIC)
    gear_quality_cap_top_for_level: int = int(ItemQuality.LEGENDARY)

    def gear_policy_for(self, *, managed_bot: bool) -> tuple[str, float]:
        if managed_bot:
            return self.gear_mode_rnd_bots, self.gear_ratio_rnd_bots
        return self.gear_mode_alt_bots, self.gear_ratio_alt_bots


@dataclass(frozen=True)
class HostSettings:
    """Host-wide playerbot settings the command engine depends on."""

    command_separator: str = "\\\\"
    command_prefix: str = ""
    limit_talents_expansion: bool = False
    min_enchanting_bot_level: int = 60
    individual_progression_enabled: bool = False
