from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CommandResult:
    matched: int = 0
    updated: int = 0
    failed: int = 0
    handled: bool = False

    def summary_line(self) -> str:
        if self.matched == 0:
            return "spec: no bots matched the selectors."
        return f"spec: matched {self.matched}, updated {self.updated}, failed {self.failed}."


@dataclass
class GearOutcome:
    mode: str
    target_average: float = 0.0
    score_cap: int = 0
    attempts: int = 0
    within_band: bool = False


@dataclass
class GearSelfOutcome:
    target_item_level: int
    achieved_item_level: int
    final_score_cap: int
    iterations: int


@dataclass
class SpecApplication:
    canonical: str
    template_slot: int
    expansion_cap: str
    from_role: bool
    talents_from_path: bool
    gear: Optional[GearOutcome] = None


@dataclass
class LoginDiagnosticsView:
    lines: List[str] = field(default_factory=list)
