from __future__ import annotations

from typing import Any, Dict, Optional

from bettersetup.infrastructure.config.env_config_store import RawValueConfigStore


class InMemoryConfigStore(RawValueConfigStore):
    def __init__(self, values: Dict[str, Any] | None = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def _raw(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
