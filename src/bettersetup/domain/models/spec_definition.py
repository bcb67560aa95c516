from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class SpecDefinition:
    canonical: str
    aliases: tuple[str, ...]
    match_tokens: tuple[str, ...]
    preferred_indexes: tuple[int, ...]

    def __post_init__(self) -> None:
        if not str(self.canonical or "").strip():
            raise ValueError("Spec definition requires a canonical name")
        if not self.aliases:
            raise ValueError(f"Spec definition {self.canonical} requires at least one alias")


@dataclass(frozen=True)
class ClassSpecProfile:
    specs: tuple[SpecDefinition, ...]
    roles: Mapping[str, tuple[str, ...]]

    def __post_init__(self) -> None:
        canonicals = [spec.canonical for spec in self.specs]
        if len(set(canonicals)) != len(canonicals):
            raise ValueError(f"Duplicate canonical spec names: {canonicals}")
        for role, members in self.roles.items():
            for member in members:
                if member not in canonicals:
                    raise ValueError(f"Role {role} references unknown spec {member}")

    def find(self, canonical: str) -> SpecDefinition | None:
        for spec in self.specs:
            if spec.canonical == canonical:
                return spec
        return None

    def role_members(self, role: str) -> tuple[str, ...]:
        return tuple(self.roles.get(role, ()))


@dataclass(frozen=True)
class ResolvedSpec:
    definition: SpecDefinition
    from_role: bool = False
