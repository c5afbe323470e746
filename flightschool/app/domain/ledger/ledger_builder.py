"""
Ledger Builder.

Turns invoice hour lines into credit entries, merges them with the flight
debit entries into one date-ordered sequence and folds the running balance.

Same-day ordering: the sort is stable and credits are placed ahead of
debits before sorting, so on equal dates invoices come first, each group in
the order it was collected. This is an assumption; the source data defines
no tie-break.
"""

from decimal import Decimal
from functools import reduce
from typing import List, NamedTuple, Sequence, Tuple

from flightschool.app.core.config import settings
from flightschool.app.models.ledger_enums import LedgerEventType
from flightschool.app.domain.ledger.records import InvoiceHourLine
from flightschool.app.schemas.ledger import LedgerEntry

ZERO = Decimal("0")


class Ledger(NamedTuple):
    entries: List[LedgerEntry]
    final_balance: Decimal


def _format_quantity(quantity: Decimal) -> str:
    # 25.00 -> "25", 2.50 -> "2.5"
    return format(quantity.normalize(), "f")


def build_invoice_entry(line: InvoiceHourLine) -> LedgerEntry:
    """Credit entry for one hour-package line."""
    description = f"Invoice ({_format_quantity(line.quantity)}h package)"
    if line.name:
        description += f" - {line.name}"

    return LedgerEntry(
        date=line.issue_date,
        event_type=LedgerEventType.INVOICE,
        reference=line.smartbill_id or f"INV-{line.invoice_id}",
        description=description,
        hours_added=line.quantity,
        hours_deducted=ZERO,
        invoice_amount=line.total_amount,
        currency=line.currency or settings.default_currency,
    )


def merge_chronologically(
    credits: Sequence[LedgerEntry],
    debits: Sequence[LedgerEntry],
) -> List[LedgerEntry]:
    return sorted([*credits, *debits], key=lambda entry: entry.date)


def _apply_entry(
    state: Tuple[List[LedgerEntry], Decimal],
    entry: LedgerEntry,
) -> Tuple[List[LedgerEntry], Decimal]:
    entries, balance = state
    balance = balance + entry.hours_added - entry.hours_deducted
    entries.append(entry.model_copy(update={"balance_after": balance}))
    return entries, balance


def apply_running_balance(ordered: Sequence[LedgerEntry]) -> Ledger:
    """
    Left fold over the ordered entries, starting from a zero balance.

    Must run over the final emission order; reordering afterwards would
    invalidate every balance_after.
    """
    entries, final_balance = reduce(_apply_entry, ordered, ([], ZERO))
    return Ledger(entries=entries, final_balance=final_balance)


class LedgerBuilder:

    @staticmethod
    def build(credits: Sequence[LedgerEntry], debits: Sequence[LedgerEntry]) -> Ledger:
        return apply_running_balance(merge_chronologically(credits, debits))
