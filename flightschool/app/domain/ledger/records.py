"""
Read-only snapshots of the two ledger sources.
"""

from datetime import date
from decimal import Decimal
from typing import List, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict


class InvoiceHourLine(BaseModel):
    """An hour-package line of a paid or imported invoice."""
    model_config = ConfigDict(frozen=True)

    invoice_id: int
    smartbill_id: Optional[str] = None
    issue_date: date
    currency: Optional[str] = None
    line_id: int = 1
    name: Optional[str] = None
    quantity: Decimal
    unit: Optional[str] = None
    total_amount: Optional[Decimal] = None


class FlightRecord(BaseModel):
    """A flown flight as seen by the ledger."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    date: date
    pilot_id: str
    instructor_id: Optional[str] = None
    payer_id: Optional[str] = None
    total_hours: Optional[Decimal] = None
    flight_type: Optional[str] = None


class CollectedEvents(NamedTuple):
    invoice_lines: List[InvoiceHourLine]
    flights: List[FlightRecord]
