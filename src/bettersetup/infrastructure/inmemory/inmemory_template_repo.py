from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from bettersetup.domain.repositories import PremadeTemplateRepository, TalentEntry


class InMemoryPremadeTemplateRepository(PremadeTemplateRepository):
    """Premade spec table keyed by class id.

    ``labels`` maps a class id to its slot labels in slot order. ``talents``
    maps ``(class_id, slot)`` to ``{level: [entry, ...]}`` where an entry is
    ``(tab, row, column, rank)``.
    """

    def __init__(
        self,
        labels: Mapping[int, Sequence[str]] | None = None,
        talents: Mapping[tuple[int, int], Mapping[int, Sequence[TalentEntry]]] | None = None,
    ) -> None:
        self._labels: Dict[int, List[str]] = {int(k): [str(v) for v in values] for k, values in (labels or {}).items()}
        self._talents: Dict[tuple[int, int], Dict[int, List[tuple[int, ...]]]] = {}
        for (class_id, slot), by_level in (talents or {}).items():
            for level, entries in by_level.items():
                for entry in entries:
                    self.add_talent_entry(class_id, slot, level, entry)

    def template_label(self, class_id: int, slot: int) -> str:
        labels = self._labels.get(int(class_id), [])
        if slot < 0 or slot >= len(labels):
            return ""
        return labels[slot]

    def talent_entries(self, class_id: int, slot: int, level: int) -> List[TalentEntry]:
        by_level = self._talents.get((int(class_id), int(slot)), {})
        return list(by_level.get(int(level), []))

    def set_labels(self, class_id: int, labels: Sequence[str]) -> None:
        self._labels[int(class_id)] = [str(label) for label in labels]

    def add_talent_entry(self, class_id: int, slot: int, level: int, entry: TalentEntry) -> None:
        by_level = self._talents.setdefault((int(class_id), int(slot)), {})
        by_level.setdefault(int(level), []).append(tuple(int(value) for value in entry))
