"""Production status transitions driven by breeding events.

Every legal combination of (current production status, breeding event type,
check outcome) is listed in ``TRANSITIONS``. A combination that is missing from
the table is illegal and ``resolve_transition`` raises ``IllegalTransition``.
An entry with no new status and no side effects is an idempotent no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from src.domain.models.breeding_event import BreedingEventType
from src.domain.value_objects.production_status import ProductionStatus


class PregnancyCheckOutcome(str, Enum):
    CONFIRMED = "confirmed"
    NEGATIVE = "negative"
    PENDING = "pending"


class SideEffect(str, Enum):
    START_SERVICE = "start_service"
    CLEAR_SERVICE = "clear_service"
    CONFIRM_PREGNANCY = "confirm_pregnancy"
    CLOSE_PREGNANCY = "close_pregnancy"
    COMPLETE_PREGNANCY = "complete_pregnancy"
    START_LACTATION = "start_lactation"
    APPEND_EVENT = "append_event"


class IllegalTransition(ValueError):
    def __init__(self, status: str | None, event_type: str, outcome: str | None = None) -> None:
        trigger = f"{event_type}/{outcome}" if outcome else event_type
        super().__init__(f"Cannot apply {trigger} to an animal in status '{status}'")
        self.status = status
        self.event_type = event_type
        self.outcome = outcome


@dataclass(frozen=True, slots=True)
class Transition:
    new_status: ProductionStatus | None = None
    effects: frozenset[SideEffect] = frozenset()

    @property
    def changes_status(self) -> bool:
        return self.new_status is not None

    @property
    def is_noop(self) -> bool:
        return self.new_status is None and not self.effects

    def has(self, effect: SideEffect) -> bool:
        return effect in self.effects

    def animal_values(
        self,
        *,
        service_date: date | None = None,
        expected_calving_date: date | None = None,
    ) -> dict:
        """Column values to write on the animal row for this transition.

        The lactation counter is not included; it is incremented in SQL by the
        repository when START_LACTATION is present.
        """
        values: dict = {}
        if self.new_status is not None:
            values["production_status"] = self.new_status.value
        if self.has(SideEffect.START_SERVICE):
            values["service_date"] = service_date
            values["expected_calving_date"] = expected_calving_date
            values["days_in_milk"] = None
        if self.has(SideEffect.CLEAR_SERVICE):
            values["service_date"] = None
            values["expected_calving_date"] = None
        if self.has(SideEffect.START_LACTATION):
            values["service_date"] = None
            values["expected_calving_date"] = None
            values["days_in_milk"] = 0
        return values


NOOP = Transition()

_INSEMINATION = BreedingEventType.INSEMINATION.value
_PREGNANCY_CHECK = BreedingEventType.PREGNANCY_CHECK.value
_CALVING = BreedingEventType.CALVING.value

_ENTER_SERVED = Transition(ProductionStatus.SERVED, frozenset({SideEffect.START_SERVICE}))
_CONFIRM = Transition(None, frozenset({SideEffect.CONFIRM_PREGNANCY, SideEffect.APPEND_EVENT}))
_AUDIT_ONLY = Transition(None, frozenset({SideEffect.APPEND_EVENT}))
_REVERT_TO_LACTATING = Transition(
    ProductionStatus.LACTATING,
    frozenset({SideEffect.CLEAR_SERVICE, SideEffect.CLOSE_PREGNANCY, SideEffect.APPEND_EVENT}),
)
_CALVE = Transition(
    ProductionStatus.LACTATING,
    frozenset(
        {SideEffect.COMPLETE_PREGNANCY, SideEffect.APPEND_EVENT, SideEffect.START_LACTATION}
    ),
)

_BREEDABLE = (
    ProductionStatus.HEIFER,
    ProductionStatus.SERVED,
    ProductionStatus.LACTATING,
    ProductionStatus.DRY,
)

TRANSITIONS: dict[tuple[ProductionStatus, str, str | None], Transition] = {
    (ProductionStatus.HEIFER, _INSEMINATION, None): _ENTER_SERVED,
    (ProductionStatus.LACTATING, _INSEMINATION, None): _ENTER_SERVED,
    (ProductionStatus.DRY, _INSEMINATION, None): _ENTER_SERVED,
    (ProductionStatus.SERVED, _INSEMINATION, None): NOOP,
    (ProductionStatus.SERVED, _CALVING, None): _CALVE,
    (ProductionStatus.DRY, _CALVING, None): _CALVE,
}

for _status in _BREEDABLE:
    TRANSITIONS[(_status, _PREGNANCY_CHECK, PregnancyCheckOutcome.CONFIRMED.value)] = _CONFIRM
    TRANSITIONS[(_status, _PREGNANCY_CHECK, PregnancyCheckOutcome.PENDING.value)] = _AUDIT_ONLY
    TRANSITIONS[(_status, _PREGNANCY_CHECK, PregnancyCheckOutcome.NEGATIVE.value)] = (
        _REVERT_TO_LACTATING if _status is ProductionStatus.SERVED else NOOP
    )


def resolve_transition(
    current_status: str | None,
    event_type: str,
    outcome: str | None = None,
) -> Transition:
    try:
        status = ProductionStatus(current_status)
    except ValueError as exc:
        raise IllegalTransition(current_status, event_type, outcome) from exc
    transition = TRANSITIONS.get((status, event_type, outcome))
    if transition is None:
        raise IllegalTransition(current_status, event_type, outcome)
    return transition
