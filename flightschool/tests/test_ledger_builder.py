"""
Unit and property tests for ledger merging and the running balance.
"""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, given, settings as hypothesis_settings
from hypothesis import strategies as st

from flightschool.app.domain.ledger.records import InvoiceHourLine, FlightRecord
from flightschool.app.domain.ledger.deduction_policy import build_flight_entry
from flightschool.app.domain.ledger.ledger_builder import (
    LedgerBuilder,
    apply_running_balance,
    build_invoice_entry,
    merge_chronologically,
)
from flightschool.app.models.ledger_enums import LedgerEventType

SUBJECT = "11111111-aaaa-4aaa-8aaa-000000000001"
OTHER = "22222222-bbbb-4bbb-8bbb-000000000002"


def make_line(issue_date=date(2024, 1, 1), quantity="25", **overrides):
    values = {
        "invoice_id": 7,
        "smartbill_id": None,
        "issue_date": issue_date,
        "currency": None,
        "line_id": 1,
        "name": None,
        "quantity": Decimal(quantity),
        "unit": "HUR",
        "total_amount": None,
    }
    values.update(overrides)
    return InvoiceHourLine(**values)


def make_flight(flight_date, hours="1.5", flight_type="SCHOOL", flight_id="f0000000-0000-4000-8000-000000000000"):
    return FlightRecord(
        id=flight_id,
        date=flight_date,
        pilot_id=SUBJECT,
        total_hours=Decimal(hours),
        flight_type=flight_type,
    )


# Invoice entries

def test_invoice_entry_uses_smartbill_number_when_present():
    entry = build_invoice_entry(make_line(smartbill_id="CRA-0042", name="PPL package",
                                          total_amount=Decimal("5000.00"), currency="EUR"))

    assert entry.event_type == LedgerEventType.INVOICE
    assert entry.reference == "CRA-0042"
    assert entry.description == "Invoice (25h package) - PPL package"
    assert entry.hours_added == Decimal("25")
    assert entry.hours_deducted == Decimal("0")
    assert entry.invoice_amount == Decimal("5000.00")
    assert entry.currency == "EUR"
    assert entry.role is None
    assert entry.flight_id is None


def test_invoice_entry_falls_back_to_internal_reference_and_default_currency():
    entry = build_invoice_entry(make_line(quantity="2.50"))

    assert entry.reference == "INV-7"
    assert entry.description == "Invoice (2.5h package)"
    assert entry.currency == "RON"


# Merge and fold

def test_entries_are_sorted_by_date():
    credits = [build_invoice_entry(make_line(issue_date=date(2024, 1, 10)))]
    debits = [build_flight_entry(make_flight(date(2024, 1, 5)), SUBJECT)]

    merged = merge_chronologically(credits, debits)

    assert [e.date for e in merged] == [date(2024, 1, 5), date(2024, 1, 10)]


def test_same_day_credits_precede_debits_and_keep_collection_order():
    """Tie-break on equal dates is the collection order: invoices, then flights."""
    day = date(2024, 3, 1)
    credits = [
        build_invoice_entry(make_line(issue_date=day, invoice_id=1)),
        build_invoice_entry(make_line(issue_date=day, invoice_id=2)),
    ]
    debits = [
        build_flight_entry(make_flight(day, flight_id="aaaaaaaa-0000-4000-8000-000000000000"), SUBJECT),
        build_flight_entry(make_flight(day, flight_id="bbbbbbbb-0000-4000-8000-000000000000"), SUBJECT),
    ]

    merged = merge_chronologically(credits, debits)

    assert [e.reference for e in merged] == ["INV-1", "INV-2", "F-aaaaaaaa", "F-bbbbbbbb"]


def test_running_balance_follows_entry_order():
    credits = [build_invoice_entry(make_line(issue_date=date(2024, 1, 1)))]
    debits = [
        build_flight_entry(make_flight(date(2024, 1, 5), hours="1.5"), SUBJECT),
        build_flight_entry(make_flight(date(2024, 1, 6), hours="2", flight_type="FERRY"), SUBJECT),
    ]

    ledger = LedgerBuilder.build(credits, debits)

    assert [e.balance_after for e in ledger.entries] == [Decimal("25"), Decimal("23.5"), Decimal("23.5")]
    assert ledger.final_balance == Decimal("23.5")


def test_balance_may_go_negative():
    """Flying before buying a package leaves an hour debt."""
    debits = [build_flight_entry(make_flight(date(2024, 1, 2), hours="1.2"), SUBJECT)]
    credits = [build_invoice_entry(make_line(issue_date=date(2024, 1, 3), quantity="10"))]

    ledger = LedgerBuilder.build(credits, debits)

    assert [e.balance_after for e in ledger.entries] == [Decimal("-1.2"), Decimal("8.8")]


def test_empty_ledger():
    ledger = apply_running_balance([])

    assert ledger.entries == []
    assert ledger.final_balance == Decimal("0")


# Properties

hours = st.decimals(min_value=0, max_value=200, places=2, allow_nan=False, allow_infinity=False)
day_offsets = st.integers(min_value=0, max_value=365)
flight_types = st.sampled_from(["SCHOOL", "CHARTER", "FERRY", "DEMO", "INVOICED", "PROMO"])


@st.composite
def event_sets(draw):
    base = date(2024, 1, 1)
    credits = [
        build_invoice_entry(make_line(
            issue_date=base + timedelta(days=draw(day_offsets)),
            quantity=str(draw(hours)),
            invoice_id=index + 1,
        ))
        for index in range(draw(st.integers(min_value=0, max_value=8)))
    ]
    debits = []
    for index in range(draw(st.integers(min_value=0, max_value=15))):
        flight = FlightRecord(
            id=f"{index:08d}-0000-4000-8000-000000000000",
            date=base + timedelta(days=draw(day_offsets)),
            pilot_id=draw(st.sampled_from([SUBJECT, OTHER])),
            instructor_id=draw(st.sampled_from([None, SUBJECT, OTHER])),
            payer_id=draw(st.sampled_from([None, SUBJECT, OTHER])),
            total_hours=draw(hours),
            flight_type=draw(flight_types),
        )
        debits.append((flight, build_flight_entry(flight, SUBJECT)))
    return credits, debits


@hypothesis_settings(max_examples=75, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(event_sets())
def test_ledger_invariants_hold_for_any_event_mix(events):
    credits, flights_and_debits = events
    ledger = LedgerBuilder.build(credits, [entry for _, entry in flights_and_debits])
    entries = ledger.entries

    # Balance recurrence
    previous = Decimal("0")
    for entry in entries:
        assert entry.balance_after == previous + entry.hours_added - entry.hours_deducted
        previous = entry.balance_after

    # Ordering
    assert all(a.date <= b.date for a, b in zip(entries, entries[1:]))

    # Conservation
    assert ledger.final_balance == (
        sum((e.hours_added for e in entries), Decimal("0"))
        - sum((e.hours_deducted for e in entries), Decimal("0"))
    )

    # Exemptions
    for flight, entry in flights_and_debits:
        if flight.flight_type in ("FERRY", "DEMO"):
            assert entry.hours_deducted == 0
        if flight.instructor_id == SUBJECT:
            assert entry.hours_deducted == 0
        if flight.pilot_id == SUBJECT and flight.payer_id and flight.payer_id != SUBJECT:
            assert entry.hours_deducted == 0
        assert entry.hours_added == 0

    assert len(entries) == len(credits) + len(flights_and_debits)
