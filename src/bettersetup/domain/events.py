from dataclasses import dataclass


@dataclass
class SpecAppliedEvent:
    bot_id: int
    bot_name: str
    canonical: str
    template_slot: int
    expansion_cap: str
    from_role: bool
    geared: bool


@dataclass
class SpecRejectedEvent:
    bot_id: int
    bot_name: str
    reason: str


@dataclass
class GearSelfCompletedEvent:
    character_id: int
    target_item_level: int
    achieved_item_level: int
    iterations: int
