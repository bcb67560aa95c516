from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from bettersetup.application.dtos import CommandResult, GearSelfOutcome, SpecApplication
from bettersetup.application.services.config_loader import load_host_settings, load_module_config
from bettersetup.application.services.gearing_service import GearingService
from bettersetup.application.services.talent_service import TalentService
from bettersetup.application.services.target_collector import TargetCollector
from bettersetup.domain.events import SpecAppliedEvent, SpecRejectedEvent
from bettersetup.domain.models.character import Character, ChatChannel, ChatType
from bettersetup.domain.models.directive import ParsedDirective
from bettersetup.domain.models.expansion import ExpansionCap
from bettersetup.domain.models.module_config import HostSettings, ModuleConfig
from bettersetup.domain.repositories import (
    BotControl,
    BotDirectory,
    CharacterSettingsRepository,
    ConfigStore,
    EquipmentFactory,
    NotificationSink,
    PremadeTemplateRepository,
)
from bettersetup.domain.services.directive_parser import is_gear_self_directive, parse_spec_directive
from bettersetup.domain.services.expansion_cap import (
    PROGRESSION_SETTING_NAMESPACE,
    narrow_progression_tier,
    resolve_expansion_cap,
)
from bettersetup.domain.services.random_source import RandomSource, SeededRandomSource
from bettersetup.domain.services.spec_catalog import build_spec_list_message, format_canonical_name
from bettersetup.domain.services.spec_resolver import resolve_requested_spec
from bettersetup.domain.services.template_resolver import resolve_template_slot
from bettersetup.domain.services.tokenizer import iter_gated_commands, trim


@dataclass(frozen=True)
class InvocationSnapshot:
    config: ModuleConfig
    settings: HostSettings


class SpecCommandService:
    """Runs ``spec`` and ``gearself`` chat commands against the addressed bots.

    One chat event is one invocation: configuration is read once, every target
    is processed under that snapshot, and a single summary line is sent back.
    A failure on one bot is counted and reported, never propagated to the rest
    of the batch.
    """

    def __init__(
        self,
        *,
        config_store: ConfigStore,
        directory: BotDirectory,
        factory: EquipmentFactory,
        templates: PremadeTemplateRepository,
        settings_repo: CharacterSettingsRepository,
        notifier: NotificationSink,
        random_source: RandomSource | None = None,
        event_publisher=None,
    ) -> None:
        self._config_store = config_store
        self._directory = directory
        self._factory = factory
        self._templates = templates
        self._settings_repo = settings_repo
        self._notifier = notifier
        self._random_source = random_source or SeededRandomSource()
        self._event_publisher = event_publisher
        self._collector = TargetCollector(directory)
        self._talents = TalentService(factory, templates)
        self._gearing = GearingService(factory, event_publisher=event_publisher)
        self._logger = logging.getLogger(__name__)

    @property
    def collector(self) -> TargetCollector:
        return self._collector

    def load_snapshot(self) -> InvocationSnapshot:
        return InvocationSnapshot(
            config=load_module_config(self._config_store),
            settings=load_host_settings(self._config_store),
        )

    def _publish(self, event: object) -> None:
        if self._event_publisher is not None:
            self._event_publisher(event)

    def handle_chat(
        self,
        sender: Character,
        message: str,
        chat_type: ChatType,
        *,
        receiver: Character | None = None,
        group_id: int | None = None,
        channel: ChatChannel | None = None,
    ) -> Optional[CommandResult]:
        if chat_type is ChatType.OFFICER:
            return None
        if chat_type is ChatType.WHISPER and receiver is None:
            return None
        if chat_type in (ChatType.PARTY, ChatType.RAID) and group_id is None:
            return None
        if chat_type is ChatType.CHANNEL and channel is None:
            return None
        if chat_type is ChatType.GUILD and not sender.guild_id:
            return None

        snapshot = self.load_snapshot()
        self.process_self_commands(sender, message, snapshot=snapshot)

        if chat_type is ChatType.WHISPER:
            targets = self._collector.direct(receiver)
            if not targets:
                return None
        elif chat_type in (ChatType.PARTY, ChatType.RAID):
            targets = self._collector.group(group_id)
        elif chat_type is ChatType.GUILD:
            targets = self._collector.guild(sender)
        elif chat_type is ChatType.CHANNEL:
            targets = self._collector.channel(sender, channel)
        else:
            return None

        return self.process_targets(sender, chat_type, message, targets, snapshot=snapshot)

    def process_targets(
        self,
        sender: Character,
        chat_type: ChatType,
        message: str,
        targets: List[Character],
        *,
        snapshot: InvocationSnapshot | None = None,
    ) -> Optional[CommandResult]:
        snapshot = snapshot or self.load_snapshot()
        if not snapshot.config.enabled:
            return None

        result = CommandResult()
        for bot in targets:
            if bot is None:
                continue
            try:
                self.process_spec_for_bot(sender, chat_type, message, bot, snapshot, result)
            except Exception:
                self._logger.exception(
                    "Spec processing failed for bot and was isolated",
                    extra={"bot_id": bot.id, "bot_name": bot.name, "sender_id": sender.id},
                )
                self._record_isolated_failure(sender, bot, result)

        self.report_summary(sender, result)
        return result

    def report_summary(self, sender: Character, result: CommandResult) -> None:
        if not result.handled:
            return
        self._notifier.send_system_message(sender, result.summary_line())

    def _record_isolated_failure(self, sender: Character, bot: Character, result: CommandResult) -> None:
        # Bypasses the control layer, which may be the collaborator that raised.
        text = f"spec: failed to apply spec for {bot.name}."
        result.handled = True
        result.failed += 1
        self._notifier.send_system_message(sender, text)
        self._publish(SpecRejectedEvent(bot_id=bot.id, bot_name=bot.name, reason=text))

    def _tell(self, sender: Character, control: BotControl, text: str) -> None:
        control.tell_master(text)
        if control.master_id != sender.id:
            self._notifier.send_system_message(sender, text)

    def _reject(self, sender: Character, control: BotControl, bot: Character, result: CommandResult, text: str) -> None:
        result.failed += 1
        self._tell(sender, control, text)
        self._publish(SpecRejectedEvent(bot_id=bot.id, bot_name=bot.name, reason=text))

    @staticmethod
    def check_master_control(sender: Character, control: BotControl, config: ModuleConfig) -> bool:
        if not config.require_master_control:
            return True
        if sender.is_elevated:
            return True
        return control.master_id == sender.id

    def process_spec_for_bot(
        self,
        sender: Character,
        chat_type: ChatType,
        message: str,
        bot: Character,
        snapshot: InvocationSnapshot,
        result: CommandResult,
    ) -> bool:
        control = self._directory.control_for(bot)
        if control is None:
            return False
        if not control.check_level_for(sender, silent=chat_type is not ChatType.WHISPER):
            return False

        config, settings = snapshot.config, snapshot.settings
        processed_any = False

        for command in iter_gated_commands(
            message,
            separator=settings.command_separator,
            prefix=settings.command_prefix,
        ):
            filtered = trim(control.filter_selectors(command))
            if not filtered:
                continue

            directive = parse_spec_directive(filtered)
            if not directive.is_command:
                continue

            processed_any = True
            result.handled = True
            result.matched += 1

            if not self.check_master_control(sender, control, config):
                self._reject(
                    sender, control, bot, result,
                    f"spec: command rejected for {bot.name} (master control required).",
                )
                continue

            if directive.list_only:
                if config.show_spec_list_on_empty:
                    self._tell(sender, control, build_spec_list_message(bot.class_id))
                continue

            try:
                applied = self._apply_directive(sender, control, bot, directive, snapshot, result)
            except Exception:
                self._logger.exception(
                    "Spec command failed and was isolated",
                    extra={"bot_id": bot.id, "bot_name": bot.name, "profile": directive.profile_text},
                )
                self._reject(sender, control, bot, result, f"spec: failed to apply spec for {bot.name}.")
                continue

            if applied is not None:
                result.updated += 1

        return processed_any

    def _apply_directive(
        self,
        sender: Character,
        control: BotControl,
        bot: Character,
        directive: ParsedDirective,
        snapshot: InvocationSnapshot,
        result: CommandResult,
    ) -> SpecApplication | None:
        config, settings = snapshot.config, snapshot.settings

        resolved = resolve_requested_spec(bot.class_id, directive.profile_text, self._random_source)
        if resolved is None:
            self._reject(
                sender, control, bot, result,
                f"spec: invalid profile '{directive.profile_text}' for {bot.name}. "
                + build_spec_list_message(bot.class_id),
            )
            return None

        template_slot = resolve_template_slot(self._templates, bot.class_id, resolved.definition)
        if template_slot is None:
            self._reject(
                sender, control, bot, result,
                f"spec: no matching premade template found for "
                f"'{format_canonical_name(resolved.definition.canonical)}' on {bot.name}.",
            )
            return None

        cap = self.resolve_cap(bot, sender, config, settings)
        self._logger.debug(
            "Resolved spec directive",
            extra={
                "bot_id": bot.id,
                "canonical": resolved.definition.canonical,
                "from_role": resolved.from_role,
                "template_slot": template_slot,
                "expansion_cap": cap.label,
            },
        )

        from_path = self._talents.apply_spec_talents(bot, template_slot, cap)
        control.reset_strategies()
        self._talents.run_post_spec_refresh(bot, cap, limit_talents_expansion=settings.limit_talents_expansion)

        gear = None
        if self._gearing.should_auto_gear(control, directive.gear_requested, config):
            gear = self._gearing.apply_auto_gear(bot, control, sender, config, settings)

        self._publish(
            SpecAppliedEvent(
                bot_id=bot.id,
                bot_name=bot.name,
                canonical=resolved.definition.canonical,
                template_slot=template_slot,
                expansion_cap=cap.label,
                from_role=resolved.from_role,
                geared=gear is not None,
            )
        )
        return SpecApplication(
            canonical=resolved.definition.canonical,
            template_slot=template_slot,
            expansion_cap=cap.label,
            from_role=resolved.from_role,
            talents_from_path=from_path,
            gear=gear,
        )

    def read_progression_tier(self, character: Character | None) -> int | None:
        if character is None:
            return None
        return narrow_progression_tier(self._settings_repo.read_setting(character.id, PROGRESSION_SETTING_NAMESPACE))

    def resolve_cap(
        self,
        bot: Character,
        sender: Character | None,
        config: ModuleConfig,
        settings: HostSettings,
    ) -> ExpansionCap:
        return resolve_expansion_cap(
            level=bot.level,
            source_mode=config.expansion_source,
            limit_talents_expansion=settings.limit_talents_expansion,
            progression_lookup=lambda: self.read_progression_tier(sender),
        )

    def process_self_commands(
        self,
        sender: Character,
        message: str,
        *,
        snapshot: InvocationSnapshot | None = None,
    ) -> List[GearSelfOutcome]:
        snapshot = snapshot or self.load_snapshot()
        if not snapshot.config.enabled:
            return []

        outcomes: List[GearSelfOutcome] = []
        for command in iter_gated_commands(
            message,
            separator=snapshot.settings.command_separator,
            prefix=snapshot.settings.command_prefix,
        ):
            if not is_gear_self_directive(command):
                continue
            if not sender.is_elevated:
                self._notifier.send_system_message(sender, "gearself: GM permission required.")
                continue

            outcome = self._gearing.apply_gear_self(sender, snapshot.settings)
            outcomes.append(outcome)
            self._notifier.send_system_message(
                sender,
                f"gearself: target average ilvl {sender.level} (from level), "
                f"current average ilvl {outcome.achieved_item_level}.",
            )
        return outcomes
