from __future__ import annotations

from collections.abc import Sequence

from bettersetup.domain.models.spec_definition import SpecDefinition
from bettersetup.domain.repositories import PremadeTemplateRepository
from bettersetup.domain.services.tokenizer import normalize_token, split_words


MAX_TEMPLATE_SLOTS = 20


def matches_template_label(label: str, tokens: Sequence[str]) -> bool:
    """Check a premade label against spec match tokens.

    Phrase tokens match as substrings of the lower-cased label; single-word
    tokens must equal a whole normalized word of the label.
    """
    if not tokens:
        return False

    label_lower = str(label or "").lower()
    words = {normalize_token(word) for word in split_words(label_lower)}

    for raw_token in tokens:
        token = str(raw_token or "").lower()
        if " " in token:
            if token in label_lower:
                return True
            continue
        token_norm = normalize_token(token)
        if token_norm and token_norm in words:
            return True
    return False


def resolve_template_slot(
    templates: PremadeTemplateRepository,
    class_id: int,
    spec: SpecDefinition,
) -> int | None:
    def _label(slot: int) -> str:
        if slot < 0 or slot >= MAX_TEMPLATE_SLOTS:
            return ""
        return str(templates.template_label(class_id, slot) or "")

    for preferred in spec.preferred_indexes:
        label = _label(preferred)
        if label and matches_template_label(label, spec.match_tokens):
            return preferred

    first_pve_match: int | None = None
    first_any_match: int | None = None
    for slot in range(MAX_TEMPLATE_SLOTS):
        label = _label(slot)
        if not label:
            break
        if not matches_template_label(label, spec.match_tokens):
            continue
        if first_any_match is None:
            first_any_match = slot
        if first_pve_match is None and "pve" in label.lower():
            first_pve_match = slot

    if first_pve_match is not None:
        return first_pve_match
    if first_any_match is not None:
        return first_any_match

    for preferred in spec.preferred_indexes:
        if _label(preferred):
            return preferred
    return None
