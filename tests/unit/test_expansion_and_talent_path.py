import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bettersetup.domain.models.expansion import ExpansionCap
from bettersetup.domain.services.expansion_cap import (
    SOURCE_AUTO,
    SOURCE_LEVEL,
    SOURCE_PROGRESSION,
    is_allowed_talent_node,
    level_based_cap,
    narrow_progression_tier,
    progression_based_cap,
    resolve_expansion_cap,
)
from bettersetup.domain.services.talent_path import build_talent_path, filter_talent_path


class ExpansionCapTests(unittest.TestCase):
    def test_level_bands(self) -> None:
        self.assertIs(ExpansionCap.VANILLA, level_based_cap(60))
        self.assertIs(ExpansionCap.TBC, level_based_cap(61))
        self.assertIs(ExpansionCap.TBC, level_based_cap(70))
        self.assertIs(ExpansionCap.WRATH, level_based_cap(71))

    def test_progression_bands(self) -> None:
        self.assertIs(ExpansionCap.VANILLA, progression_based_cap(7))
        self.assertIs(ExpansionCap.TBC, progression_based_cap(8))
        self.assertIs(ExpansionCap.TBC, progression_based_cap(12))
        self.assertIs(ExpansionCap.WRATH, progression_based_cap(13))

    def test_unlimited_host_always_wrath(self) -> None:
        cap = resolve_expansion_cap(
            level=20,
            source_mode=SOURCE_PROGRESSION,
            limit_talents_expansion=False,
            progression_lookup=lambda: 1,
        )
        self.assertIs(ExpansionCap.WRATH, cap)

    def test_progression_tier_is_read_as_one_byte(self) -> None:
        self.assertEqual(12, narrow_progression_tier(12))
        self.assertEqual(44, narrow_progression_tier(300))
        self.assertEqual(0, narrow_progression_tier(256))
        self.assertIsNone(narrow_progression_tier(None))

    def test_auto_prefers_progression_tier(self) -> None:
        cap = resolve_expansion_cap(
            level=80,
            source_mode=SOURCE_AUTO,
            limit_talents_expansion=True,
            progression_lookup=lambda: 5,
        )
        self.assertIs(ExpansionCap.VANILLA, cap)

    def test_missing_tier_falls_back_to_level(self) -> None:
        cap = resolve_expansion_cap(
            level=65,
            source_mode=SOURCE_PROGRESSION,
            limit_talents_expansion=True,
            progression_lookup=lambda: None,
        )
        self.assertIs(ExpansionCap.TBC, cap)

    def test_level_mode_never_consults_progression(self) -> None:
        def _lookup():
            raise AssertionError("progression should not be read")

        cap = resolve_expansion_cap(
            level=80,
            source_mode=SOURCE_LEVEL,
            limit_talents_expansion=True,
            progression_lookup=_lookup,
        )
        self.assertIs(ExpansionCap.WRATH, cap)

    def test_labels_and_glyph_support(self) -> None:
        self.assertEqual("Vanilla", ExpansionCap.VANILLA.label)
        self.assertEqual("TBC", ExpansionCap.TBC.label)
        self.assertEqual("Wrath", ExpansionCap.WRATH.label)
        self.assertFalse(ExpansionCap.TBC.supports_glyphs)
        self.assertTrue(ExpansionCap.WRATH.supports_glyphs)
        self.assertLess(ExpansionCap.VANILLA, ExpansionCap.TBC)

    def test_talent_node_legality(self) -> None:
        self.assertTrue(is_allowed_talent_node(ExpansionCap.VANILLA, 5, 2))
        self.assertTrue(is_allowed_talent_node(ExpansionCap.VANILLA, 6, 1))
        self.assertFalse(is_allowed_talent_node(ExpansionCap.VANILLA, 6, 0))
        self.assertFalse(is_allowed_talent_node(ExpansionCap.VANILLA, 7, 1))
        self.assertTrue(is_allowed_talent_node(ExpansionCap.TBC, 7, 3))
        self.assertTrue(is_allowed_talent_node(ExpansionCap.TBC, 8, 1))
        self.assertFalse(is_allowed_talent_node(ExpansionCap.TBC, 8, 2))
        self.assertFalse(is_allowed_talent_node(ExpansionCap.TBC, 9, 1))
        self.assertTrue(is_allowed_talent_node(ExpansionCap.WRATH, 10, 2))


class TalentPathTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = {
            40: [(0, 4, 1, 5)],
            49: [(0, 5, 0, 1)],
            60: [(0, 8, 1, 1), (0, 8, 2, 1)],
            80: [(1, 10, 1, 1)],
        }

    def _entries(self, level: int):
        return self.table.get(level, [])

    def test_starts_from_nearest_populated_level_below(self) -> None:
        path = build_talent_path(self._entries, 55)
        self.assertEqual([(0, 5, 0, 1), (0, 8, 1, 1), (0, 8, 2, 1), (1, 10, 1, 1)], path)

    def test_level_above_range_is_clamped(self) -> None:
        self.assertEqual([(1, 10, 1, 1)], build_talent_path(self._entries, 95))

    def test_no_populated_levels_below_start(self) -> None:
        path = build_talent_path(lambda level: [], 30)
        self.assertEqual([], path)

    def test_filter_strips_nodes_above_the_cap(self) -> None:
        path = build_talent_path(self._entries, 49)
        self.assertEqual([(0, 5, 0, 1)], filter_talent_path(path, ExpansionCap.VANILLA))
        self.assertEqual([(0, 5, 0, 1), (0, 8, 1, 1)], filter_talent_path(path, ExpansionCap.TBC))
        self.assertEqual(path, filter_talent_path(path, ExpansionCap.WRATH))

    def test_filter_drops_short_entries(self) -> None:
        self.assertEqual([], filter_talent_path([(0, 1, 1)], ExpansionCap.WRATH))


if __name__ == "__main__":
    unittest.main()
