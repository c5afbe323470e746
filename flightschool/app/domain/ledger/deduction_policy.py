"""
Deduction Policy.

Decides, per flight, who pays, what part the subject user played, and
whether the flight debits the subject's hour balance.

Decision table (subject = the user whose ledger is being built):

    payer         = payer_id if set, else pilot_id
    role          = INSTRUCTOR  if instructor_id == subject
                    PAYER       elif subject is payer and payer != pilot
                    PILOT       otherwise
    should_deduct = subject is payer
                    and role != INSTRUCTOR
                    and flight_type not in {FERRY, DEMO}
                    and not (subject is pilot and payer_id set and payer_id != subject)

Every condition must hold; a single failing condition means zero hours
are deducted for that flight, whatever its total_hours.
"""

from decimal import Decimal
from typing import NamedTuple, Optional

from flightschool.app.models.ledger_enums import FlightRole, FlightType, LedgerEventType
from flightschool.app.domain.ledger.records import FlightRecord
from flightschool.app.schemas.ledger import LedgerEntry

NON_BILLABLE_FLIGHT_TYPES = frozenset({FlightType.FERRY.value, FlightType.DEMO.value})

FLIGHT_TYPE_LABELS = {
    FlightType.FERRY.value: "Ferry",
    FlightType.DEMO.value: "Demo",
    FlightType.CHARTER.value: "Charter",
    FlightType.SCHOOL.value: "School",
    FlightType.INVOICED.value: "Invoiced",
    FlightType.PROMO.value: "Promo",
}


class FlightDecision(NamedTuple):
    payer_id: str
    role: FlightRole
    should_deduct: bool


def effective_payer(flight: FlightRecord) -> str:
    """A flight without an explicit payer is paid by its pilot."""
    return flight.payer_id or flight.pilot_id


def is_flown_for_someone_else(flight: FlightRecord, subject_user_id: str) -> bool:
    """True when the subject piloted a flight that another user pays for."""
    return (
        flight.pilot_id == subject_user_id
        and bool(flight.payer_id)
        and flight.payer_id != subject_user_id
    )


def decide(flight: FlightRecord, subject_user_id: str) -> FlightDecision:
    payer_id = effective_payer(flight)
    subject_pays = payer_id == subject_user_id

    if flight.instructor_id == subject_user_id:
        role = FlightRole.INSTRUCTOR
    elif subject_pays and payer_id != flight.pilot_id:
        role = FlightRole.PAYER
    else:
        role = FlightRole.PILOT

    should_deduct = (
        subject_pays
        and role is not FlightRole.INSTRUCTOR
        and flight.flight_type not in NON_BILLABLE_FLIGHT_TYPES
        and not is_flown_for_someone_else(flight, subject_user_id)
    )

    return FlightDecision(payer_id=payer_id, role=role, should_deduct=should_deduct)


def flight_type_label(flight_type: Optional[str]) -> str:
    """Human label for a flight type code; unknown codes pass through."""
    if not flight_type:
        return FLIGHT_TYPE_LABELS[FlightType.SCHOOL.value]
    return FLIGHT_TYPE_LABELS.get(flight_type, flight_type)


def flight_reference(flight_id: str) -> str:
    return f"F-{flight_id[:8]}"


def build_flight_entry(flight: FlightRecord, subject_user_id: str) -> LedgerEntry:
    """Debit entry for one flight. balance_after is filled in by the ledger builder."""
    decision = decide(flight, subject_user_id)
    flown_hours = flight.total_hours if flight.total_hours is not None else Decimal("0")

    return LedgerEntry(
        date=flight.date,
        event_type=LedgerEventType.FLIGHT,
        reference=flight_reference(flight.id),
        description=flight_type_label(flight.flight_type),
        hours_added=Decimal("0"),
        hours_deducted=flown_hours if decision.should_deduct else Decimal("0"),
        flight_type=flight.flight_type,
        role=decision.role,
        flight_id=flight.id,
    )
