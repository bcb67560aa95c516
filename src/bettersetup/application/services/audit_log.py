from __future__ import annotations

import logging

from bettersetup.application.services.event_bus import EventBus
from bettersetup.domain.events import GearSelfCompletedEvent, SpecAppliedEvent, SpecRejectedEvent


_LOGGER = logging.getLogger(__name__)


def _on_spec_applied(event: SpecAppliedEvent) -> None:
    _LOGGER.info(
        "Spec %s applied to %s (slot %s, cap %s, role roll %s, geared %s)",
        event.canonical,
        event.bot_name,
        event.template_slot,
        event.expansion_cap,
        event.from_role,
        event.geared,
    )


def _on_spec_rejected(event: SpecRejectedEvent) -> None:
    _LOGGER.info("Spec command rejected for %s: %s", event.bot_name, event.reason)


def _on_gear_self(event: GearSelfCompletedEvent) -> None:
    _LOGGER.info(
        "gearself for character %s reached %s/%s after %s iteration(s)",
        event.character_id,
        event.achieved_item_level,
        event.target_item_level,
        event.iterations,
    )


def register_audit_log_handlers(event_bus: EventBus) -> None:
    event_bus.subscribe(SpecAppliedEvent, _on_spec_applied, priority=900)
    event_bus.subscribe(SpecRejectedEvent, _on_spec_rejected, priority=900)
    event_bus.subscribe(GearSelfCompletedEvent, _on_gear_self, priority=900)
