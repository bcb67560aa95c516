from __future__ import annotations

from bettersetup.domain.models.directive import NOT_A_COMMAND, ParsedDirective
from bettersetup.domain.services.tokenizer import join_words, normalize_token, split_words


SPEC_VERB = "spec"
GEAR_FLAG = "gear"
GEAR_SELF_VERB = "gearself"


def parse_spec_directive(command: str) -> ParsedDirective:
    """Parse ``spec``, ``spec <profile>`` and ``spec <profile> gear``.

    Anything that does not open with the ``spec`` verb is returned as
    not-a-command so ordinary chat passes through untouched.
    """
    words = split_words(command)
    if not words or normalize_token(words[0]) != SPEC_VERB:
        return NOT_A_COMMAND

    if len(words) == 1:
        return ParsedDirective(is_command=True, list_only=True)

    gear_requested = False
    if normalize_token(words[-1]) == GEAR_FLAG:
        gear_requested = True
        words = words[:-1]

    if len(words) == 1:
        return ParsedDirective(is_command=True, list_only=True, gear_requested=gear_requested)

    return ParsedDirective(
        is_command=True,
        gear_requested=gear_requested,
        profile_text=join_words(words, 1),
    )


def is_gear_self_directive(command: str) -> bool:
    # Trailing words are free-text notes.
    words = split_words(command)
    return bool(words) and normalize_token(words[0]) == GEAR_SELF_VERB
