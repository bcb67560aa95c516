from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from bettersetup.domain.repositories import ConfigStore


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def env_var_name(key: str) -> str:
    """``PlayerbotBetterSetup.Spec.Enable`` -> ``PLAYERBOTBETTERSETUP_SPEC_ENABLE``."""
    return _NON_ALNUM.sub("_", str(key)).strip("_").upper()


class RawValueConfigStore(ConfigStore):
    """Typed reads over a raw key/value source; malformed values yield the default."""

    def _raw(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def get_bool(self, key: str, default: bool) -> bool:
        raw = self._raw(key)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        normalized = str(raw).strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSY:
            return False
        return default

    def get_float(self, key: str, default: float) -> float:
        raw = self._raw(key)
        if raw is None or str(raw).strip() == "":
            return default
        try:
            return float(str(raw).strip())
        except ValueError:
            return default

    def get_uint(self, key: str, default: int) -> int:
        raw = self._raw(key)
        if raw is None or str(raw).strip() == "":
            return default
        try:
            value = int(str(raw).strip())
        except ValueError:
            try:
                value = int(float(str(raw).strip()))
            except ValueError:
                return default
        return value if value >= 0 else default

    def get_string(self, key: str, default: str) -> str:
        raw = self._raw(key)
        if raw is None:
            return default
        return str(raw)


class EnvConfigStore(RawValueConfigStore):
    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def _raw(self, key: str) -> Optional[Any]:
        environ = self._environ if self._environ is not None else os.environ
        return environ.get(env_var_name(key))
