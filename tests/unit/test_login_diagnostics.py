import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bettersetup.application.services.login_diagnostics import LoginDiagnosticsService
from bettersetup.domain.models.character import Character, EquippedItem, ItemQuality
from bettersetup.domain.services.expansion_cap import PROGRESSION_SETTING_NAMESPACE
from bettersetup.infrastructure.inmemory.inmemory_bot_directory import RecordingNotifier
from bettersetup.infrastructure.inmemory.inmemory_config_store import InMemoryConfigStore
from bettersetup.infrastructure.inmemory.inmemory_equipment_factory import InMemoryEquipmentFactory
from bettersetup.infrastructure.inmemory.inmemory_settings_repo import InMemoryCharacterSettingsRepository


class LoginDiagnosticsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.player = Character(id=1, name="Aldric", class_id=1, level=68)
        self.factory = InMemoryEquipmentFactory()
        self.factory.equip(
            self.player,
            [EquippedItem(slot=slot, item_level=120, quality=int(ItemQuality.RARE)) for slot in (0, 1, 2, 4)],
        )
        self.settings_repo = InMemoryCharacterSettingsRepository()
        self.notifier = RecordingNotifier()

    def _service(self, values=None) -> LoginDiagnosticsService:
        return LoginDiagnosticsService(
            config_store=InMemoryConfigStore(values),
            settings_repo=self.settings_repo,
            factory=self.factory,
            notifier=self.notifier,
        )

    def test_unlimited_host(self) -> None:
        view = self._service().send(self.player)

        self.assertEqual(5, len(view.lines))
        self.assertEqual(view.lines, self.notifier.messages_for(self.player))
        self.assertEqual("|cff00ff00mod-playerbot-bettersetup:|r loaded", view.lines[0])
        self.assertEqual("|cff00ff00Individual Progression:|r not loaded/disabled", view.lines[1])
        self.assertEqual(
            "|cff00ff00Expansion used to determine gear:|r Wrath (AiPlayerbot.LimitTalentsExpansion=0)",
            view.lines[2],
        )
        self.assertEqual("|cff00ff00Master average ilvl:|r 120", view.lines[3])
        self.assertEqual("|cff00ff00Bot target ilvl (rnd/alt):|r 120 / 120", view.lines[4])

    def test_auto_source_with_progression_tier(self) -> None:
        self.settings_repo.write_setting(self.player.id, PROGRESSION_SETTING_NAMESPACE, 9)
        view = self._service(
            {
                "AiPlayerbot.LimitTalentsExpansion": "1",
                "IndividualProgression.Enable": "1",
                "PlayerbotBetterSetup.Spec.GearModeAltBots": "top_for_level",
                "PlayerbotBetterSetup.Spec.GearMasterIlvlRatioRndBots": "0.5",
            }
        ).build(self.player)

        self.assertTrue(view.lines[1].endswith("loaded"))
        self.assertTrue(view.lines[2].endswith("TBC (auto -> progression tier 9)"))
        self.assertTrue(view.lines[4].endswith("60 / top_for_level"))

    def test_level_fallback_annotations(self) -> None:
        view = self._service(
            {"AiPlayerbot.LimitTalentsExpansion": "1", "PlayerbotBetterSetup.Spec.ExpansionSource": "progression"}
        ).build(self.player)
        self.assertTrue(view.lines[2].endswith("TBC (progression tier missing, level fallback)"))

        view = self._service(
            {"AiPlayerbot.LimitTalentsExpansion": "1", "PlayerbotBetterSetup.Spec.ExpansionSource": "level"}
        ).build(self.player)
        self.assertTrue(view.lines[2].endswith("TBC (level source)"))

        view = self._service({"AiPlayerbot.LimitTalentsExpansion": "1"}).build(self.player)
        self.assertTrue(view.lines[2].endswith("TBC (auto -> level fallback)"))

    def test_ungeared_player_gets_ratio_fallback_label(self) -> None:
        view = self._service().build(Character(id=9, name="Fresh", class_id=1, level=10))
        self.assertTrue(view.lines[4].endswith("top_for_level (ratio fallback) / top_for_level (ratio fallback)"))

    def test_disabled(self) -> None:
        view = self._service({"PlayerbotBetterSetup.LoginDiagnostics.Enable": "no"}).send(self.player)
        self.assertEqual([], view.lines)
        self.assertEqual([], self.notifier.messages)


if __name__ == "__main__":
    unittest.main()
