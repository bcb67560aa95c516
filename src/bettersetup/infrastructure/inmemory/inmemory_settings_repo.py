from __future__ import annotations

from typing import Dict, Optional, Tuple

from bettersetup.domain.repositories import CharacterSettingsRepository


class InMemoryCharacterSettingsRepository(CharacterSettingsRepository):
    def __init__(self, values: Dict[Tuple[int, str], int] | None = None) -> None:
        self._values: Dict[Tuple[int, str], int] = dict(values or {})

    def read_setting(self, character_id: int, namespace: str) -> Optional[int]:
        return self._values.get((int(character_id), str(namespace)))

    def write_setting(self, character_id: int, namespace: str, value: int) -> None:
        self._values[(int(character_id), str(namespace))] = int(value)
