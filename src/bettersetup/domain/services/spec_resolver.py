from __future__ import annotations

from bettersetup.domain.models.spec_definition import ResolvedSpec
from bettersetup.domain.services.random_source import RandomSource, SeededRandomSource
from bettersetup.domain.services.spec_catalog import profile_for_class
from bettersetup.domain.services.tokenizer import normalize_token


def resolve_requested_spec(
    class_id: int,
    requested_profile: str,
    random_source: RandomSource | None = None,
) -> ResolvedSpec | None:
    """Resolve free text into one catalog entry for the class.

    Literal aliases win deterministically. Otherwise the text is read as a
    role key and one member is rolled uniformly.
    """
    profile = profile_for_class(class_id)
    if profile is None:
        return None

    requested = normalize_token(requested_profile)
    if not requested:
        return None

    for spec in profile.specs:
        for alias in spec.aliases:
            if normalize_token(alias) == requested:
                return ResolvedSpec(definition=spec, from_role=False)

    members = profile.role_members(requested)
    if not members:
        return None

    if len(members) == 1:
        selected_index = 0
    else:
        source = random_source or SeededRandomSource()
        selected_index = source.randint(0, len(members) - 1)

    definition = profile.find(members[selected_index])
    if definition is None:
        return None
    return ResolvedSpec(definition=definition, from_role=True)
