"""
Summary Aggregator.

hours_by_type reports hours *flown* per category and is computed from the
raw flights, not from the ledger: a FERRY flight shows up under ferry hours
even though it never debits anyone. Ledger totals report hours *charged*.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from flightschool.app.models.ledger_enums import FlightType, LedgerEventType
from flightschool.app.domain.ledger.records import FlightRecord
from flightschool.app.schemas.ledger import HoursBucket, HoursByType, LedgerEntry, LedgerSummary

# Summary bucket -> flight type code. PROMO is not bucketed.
SUMMARY_BUCKETS = {
    "invoiced": FlightType.INVOICED.value,
    "school": FlightType.SCHOOL.value,
    "charter": FlightType.CHARTER.value,
    "demo": FlightType.DEMO.value,
    "ferry": FlightType.FERRY.value,
}


def involves(flight: FlightRecord, subject_user_id: str) -> bool:
    return flight.pilot_id == subject_user_id or flight.payer_id == subject_user_id


def _bucket(flights: Iterable[FlightRecord]) -> HoursBucket:
    hours = Decimal("0")
    count = 0
    for flight in flights:
        hours += flight.total_hours or Decimal("0")
        count += 1
    return HoursBucket(hours=hours, count=count)


class SummaryAggregator:

    @staticmethod
    def hours_by_type(flights: Sequence[FlightRecord], subject_user_id: str) -> HoursByType:
        """Flown hours and flight counts per category for flights involving the subject."""
        relevant = [flight for flight in flights if involves(flight, subject_user_id)]
        return HoursByType(**{
            bucket: _bucket(f for f in relevant if f.flight_type == code)
            for bucket, code in SUMMARY_BUCKETS.items()
        })

    @staticmethod
    def summarize(
        entries: Sequence[LedgerEntry],
        flights: Sequence[FlightRecord],
        subject_user_id: str,
    ) -> LedgerSummary:
        total_added = sum((entry.hours_added for entry in entries), Decimal("0"))
        total_deducted = sum((entry.hours_deducted for entry in entries), Decimal("0"))
        final_balance = entries[-1].balance_after if entries else Decimal("0")

        return LedgerSummary(
            total_hours_added=total_added,
            total_hours_deducted=total_deducted,
            final_balance=final_balance,
            entry_count=len(entries),
            invoice_count=sum(1 for e in entries if e.event_type == LedgerEventType.INVOICE),
            flight_count=sum(1 for e in entries if e.event_type == LedgerEventType.FLIGHT),
            hours_by_type=SummaryAggregator.hours_by_type(flights, subject_user_id),
        )
