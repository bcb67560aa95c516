from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from bettersetup.domain.models.spec_definition import ClassSpecProfile, SpecDefinition
from bettersetup.domain.services.tokenizer import normalize_token


CLASS_WARRIOR = 1
CLASS_PALADIN = 2
CLASS_HUNTER = 3
CLASS_ROGUE = 4
CLASS_PRIEST = 5
CLASS_DEATH_KNIGHT = 6
CLASS_SHAMAN = 7
CLASS_MAGE = 8
CLASS_WARLOCK = 9
CLASS_DRUID = 11

CLASS_NAMES: Mapping[int, str] = MappingProxyType(
    {
        CLASS_WARRIOR: "warrior",
        CLASS_PALADIN: "paladin",
        CLASS_HUNTER: "hunter",
        CLASS_ROGUE: "rogue",
        CLASS_PRIEST: "priest",
        CLASS_DEATH_KNIGHT: "deathknight",
        CLASS_SHAMAN: "shaman",
        CLASS_MAGE: "mage",
        CLASS_WARLOCK: "warlock",
        CLASS_DRUID: "druid",
    }
)

ROLE_ORDER: tuple[str, ...] = ("tank", "heal", "melee", "ranged", "dps")


def _spec(canonical: str, aliases, match_tokens, preferred) -> SpecDefinition:
    return SpecDefinition(canonical, tuple(aliases), tuple(match_tokens), tuple(preferred))


def _profile(specs, roles) -> ClassSpecProfile:
    return ClassSpecProfile(
        specs=tuple(specs),
        roles=MappingProxyType({role: tuple(members) for role, members in roles.items()}),
    )


# preferred_indexes are curated premade slot hints; match_tokens are the fallback
# used when the hinted slot label no longer agrees.
CLASS_SPEC_CATALOG: Mapping[int, ClassSpecProfile] = MappingProxyType(
    {
        CLASS_WARRIOR: _profile(
            (
                _spec("arms", ("arms", "arm"), ("arms",), (0,)),
                _spec("fury", ("fury", "fur"), ("fury",), (1,)),
                _spec("protection", ("protection", "prot"), ("prot", "protection"), (2,)),
            ),
            {"tank": ("protection",), "melee": ("arms", "fury"), "dps": ("arms", "fury")},
        ),
        CLASS_PALADIN: _profile(
            (
                _spec("holy", ("holy", "hpal"), ("holy",), (0,)),
                _spec("protection", ("protection", "prot"), ("prot", "protection"), (1,)),
                _spec("retribution", ("retribution", "ret"), ("ret", "retribution"), (2,)),
            ),
            {
                "tank": ("protection",),
                "heal": ("holy",),
                "melee": ("retribution",),
                "dps": ("retribution",),
            },
        ),
        CLASS_HUNTER: _profile(
            (
                _spec("beastmaster", ("beastmaster", "bm"), ("bm", "beast"), (0,)),
                _spec("marksman", ("marksman", "mm"), ("mm", "marksman", "marksmanship"), (1,)),
                _spec("survival", ("survival", "surv", "sv"), ("surv", "survival"), (2,)),
            ),
            {
                "ranged": ("beastmaster", "marksman", "survival"),
                "dps": ("beastmaster", "marksman", "survival"),
            },
        ),
        CLASS_ROGUE: _profile(
            (
                _spec("assassination", ("assassination", "as"), ("as", "assassination"), (0,)),
                _spec("combat", ("combat", "comb"), ("combat",), (1,)),
                _spec("subtlety", ("subtlety", "sub"), ("subtlety", "sub"), (2,)),
            ),
            {
                "melee": ("assassination", "combat", "subtlety"),
                "dps": ("assassination", "combat", "subtlety"),
            },
        ),
        CLASS_PRIEST: _profile(
            (
                _spec("discipline", ("discipline", "disc"), ("disc", "discipline"), (0,)),
                _spec("holy", ("holy", "hpr"), ("holy",), (1,)),
                _spec("shadow", ("shadow", "spr"), ("shadow",), (2,)),
            ),
            {"heal": ("discipline", "holy"), "ranged": ("shadow",), "dps": ("shadow",)},
        ),
        CLASS_DEATH_KNIGHT: _profile(
            (
                _spec("blood_tank", ("blood_tank", "bloodtank", "bdkt"), ("blood",), (0,)),
                _spec(
                    "blood_dps",
                    ("blood_dps", "blooddps", "bdkd"),
                    ("double aura blood", "blood dps", "blood"),
                    (3, 0),
                ),
                _spec("frost", ("frost", "fr"), ("frost",), (1,)),
                _spec("unholy", ("unholy", "uh"), ("unholy",), (2,)),
            ),
            {
                "tank": ("blood_tank",),
                "melee": ("blood_dps", "frost", "unholy"),
                "dps": ("blood_dps", "frost", "unholy"),
            },
        ),
        CLASS_SHAMAN: _profile(
            (
                _spec("elemental", ("elemental", "ele"), ("ele", "elemental"), (0,)),
                _spec("enhancement", ("enhancement", "enh"), ("enh", "enhancement"), (1,)),
                _spec("restoration", ("restoration", "resto"), ("resto", "restoration"), (2,)),
            ),
            {
                "heal": ("restoration",),
                "melee": ("enhancement",),
                "ranged": ("elemental",),
                "dps": ("elemental", "enhancement"),
            },
        ),
        CLASS_MAGE: _profile(
            (
                _spec("arcane", ("arcane", "arc"), ("arcane",), (0,)),
                _spec("fire", ("fire", "fir"), ("fire",), (1,)),
                _spec("frost", ("frost", "fr"), ("frost",), (2,)),
            ),
            {"ranged": ("arcane", "fire", "frost"), "dps": ("arcane", "fire", "frost")},
        ),
        CLASS_WARLOCK: _profile(
            (
                _spec("affliction", ("affliction", "affli", "aff"), ("affli", "affliction"), (0,)),
                _spec("demonology", ("demonology", "demo"), ("demo", "demonology"), (1,)),
                _spec("destruction", ("destruction", "destro", "dest"), ("destro", "destruction"), (2,)),
            ),
            {
                "ranged": ("affliction", "demonology", "destruction"),
                "dps": ("affliction", "demonology", "destruction"),
            },
        ),
        CLASS_DRUID: _profile(
            (
                _spec("balance", ("balance", "bal"), ("balance",), (0,)),
                _spec("feral_tank", ("feral_tank", "feraltank", "bear"), ("bear",), (1,)),
                _spec("feral_dps", ("feral_dps", "feraldps", "cat"), ("cat",), (3,)),
                _spec("restoration", ("restoration", "resto"), ("resto", "restoration"), (2,)),
            ),
            {
                "tank": ("feral_tank",),
                "heal": ("restoration",),
                "melee": ("feral_dps",),
                "ranged": ("balance",),
                "dps": ("balance", "feral_dps"),
            },
        ),
    }
)


def profile_for_class(class_id: int | None) -> ClassSpecProfile | None:
    try:
        return CLASS_SPEC_CATALOG.get(int(class_id))
    except (TypeError, ValueError):
        return None


def class_id_for_name(class_name: str | None) -> int | None:
    target = normalize_token(class_name)
    for class_id, name in CLASS_NAMES.items():
        if name == target:
            return class_id
    return None


def format_canonical_name(canonical: str) -> str:
    return str(canonical or "").replace("_", " ")


def build_spec_list_message(class_id: int | None) -> str:
    profile = profile_for_class(class_id)
    if profile is None:
        return "No spec profile is defined for this class."

    role_parts: list[str] = []
    for role in ROLE_ORDER:
        members = profile.role_members(role)
        if not members:
            continue
        if len(members) == 1:
            role_parts.append(f"{role} ({format_canonical_name(members[0])})")
            continue
        options = "/".join(format_canonical_name(member) for member in members)
        role_parts.append(f"{role} (random {options})")

    exact = ", ".join(format_canonical_name(spec.canonical) for spec in profile.specs)

    message = "Valid specs: " + ", ".join(role_parts)
    if role_parts:
        message += ". "
    return f"{message}Exact: {exact}."
