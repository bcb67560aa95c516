import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bettersetup.domain.models.character import EquippedItem, ItemQuality
from bettersetup.domain.services.gear_policy import (
    NO_SCORE_LIMIT,
    compute_master_target_average,
    gear_within_target_band,
    is_master_ratio_mode,
    next_self_gear_cap,
    round_half_up,
    score_cap_for_target,
    target_item_level_label,
)


def _items(*levels, quality=ItemQuality.EPIC):
    return [EquippedItem(slot=slot, item_level=level, quality=int(quality)) for slot, level in enumerate(levels)]


class GearModeTests(unittest.TestCase):
    def test_mode_spellings(self) -> None:
        self.assertTrue(is_master_ratio_mode("master_ilvl_ratio"))
        self.assertTrue(is_master_ratio_mode("MasterIlvlRatio"))
        self.assertFalse(is_master_ratio_mode("top_for_level"))
        self.assertFalse(is_master_ratio_mode(None))

    def test_target_average(self) -> None:
        self.assertEqual(0.0, compute_master_target_average(0.0, 1.0))
        self.assertEqual(0.0, compute_master_target_average(200.0, 0.0))
        self.assertEqual(1.0, compute_master_target_average(2.0, 0.1))
        self.assertAlmostEqual(150.0, compute_master_target_average(200.0, 0.75))

    def test_round_half_up(self) -> None:
        self.assertEqual(3, round_half_up(2.5))
        self.assertEqual(2, round_half_up(2.49))

    def test_score_cap_is_never_zero_for_a_valid_target(self) -> None:
        self.assertEqual(1, score_cap_for_target(10.0, lambda level, quality: 0))
        self.assertEqual(NO_SCORE_LIMIT, score_cap_for_target(0.0, lambda level, quality: 500))

    def test_score_cap_asks_for_epic_at_rounded_target(self) -> None:
        seen = []

        def _compute(level, quality):
            seen.append((level, quality))
            return level * 10

        self.assertEqual(1510, score_cap_for_target(150.5, _compute))
        self.assertEqual([(151, int(ItemQuality.EPIC))], seen)


class GearBandTests(unittest.TestCase):
    def test_band_edges_are_inclusive(self) -> None:
        self.assertTrue(gear_within_target_band(_items(150, 250), 200.0, lower_ratio=0.75, upper_ratio=1.25))

    def test_item_outside_band_fails(self) -> None:
        self.assertFalse(gear_within_target_band(_items(149, 200), 200.0, lower_ratio=0.75, upper_ratio=1.25))
        self.assertFalse(gear_within_target_band(_items(200, 251), 200.0, lower_ratio=0.75, upper_ratio=1.25))

    def test_lowest_tier_quality_fails_even_in_band(self) -> None:
        items = _items(200, quality=ItemQuality.NORMAL)
        self.assertFalse(gear_within_target_band(items, 200.0, lower_ratio=0.75, upper_ratio=1.25))

    def test_body_and_tabard_slots_are_exempt(self) -> None:
        items = _items(200, 200, 200) + [
            EquippedItem(slot=3, item_level=1, quality=int(ItemQuality.POOR)),
            EquippedItem(slot=18, item_level=1, quality=int(ItemQuality.NORMAL)),
        ]
        self.assertTrue(gear_within_target_band(items, 200.0, lower_ratio=0.85, upper_ratio=1.15))

    def test_lower_bound_never_below_one(self) -> None:
        items = _items(1)
        self.assertTrue(gear_within_target_band(items, 2.0, lower_ratio=0.01, upper_ratio=1.0))

    def test_invalid_target_always_passes(self) -> None:
        self.assertTrue(gear_within_target_band(_items(1), 0.0, lower_ratio=0.85, upper_ratio=1.15))


class SelfGearStepTests(unittest.TestCase):
    def test_proportional_step(self) -> None:
        self.assertEqual(300, next_self_gear_cap(120, 60, 24))
        self.assertEqual(100, next_self_gear_cap(200, 40, 80))

    def test_stalled_step_still_moves(self) -> None:
        self.assertEqual(11, next_self_gear_cap(10, 60, 59))
        self.assertEqual(100, next_self_gear_cap(100, 60, 60))

    def test_cap_never_below_one(self) -> None:
        self.assertEqual(1, next_self_gear_cap(1, 1, 50))


class TargetLabelTests(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertEqual("top_for_level", target_item_level_label("top_for_level", 1.0, 200.0))
        self.assertEqual("top_for_level (ratio fallback)", target_item_level_label("masterilvlratio", 1.0, 0.0))
        self.assertEqual("180", target_item_level_label("masterilvlratio", 0.9, 200.0))


if __name__ == "__main__":
    unittest.main()
