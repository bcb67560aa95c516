from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedDirective:
    is_command: bool = False
    list_only: bool = False
    gear_requested: bool = False
    profile_text: str = ""


NOT_A_COMMAND = ParsedDirective()
