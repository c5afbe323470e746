"""
Settlement Ledger Schemas.

Field names are snake_case in Python and camelCase on the wire.
Hour and money values are Decimals internally and JSON numbers in responses.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from flightschool.app.models.ledger_enums import LedgerEventType, FlightRole


Hours = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Money = Hours


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LedgerEntry(CamelModel):
    """One chronological credit (invoice) or debit (flight) of hours."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    date: date_type
    event_type: LedgerEventType
    reference: str
    description: str
    hours_added: Hours = Decimal("0")
    hours_deducted: Hours = Decimal("0")
    balance_after: Hours = Decimal("0")

    flight_type: Optional[str] = None
    role: Optional[FlightRole] = None
    invoice_amount: Optional[Money] = None
    currency: Optional[str] = None
    flight_id: Optional[str] = None


class HoursBucket(CamelModel):
    """Hours flown and number of flights in one category."""
    hours: Hours = Decimal("0")
    count: int = 0


class HoursByType(CamelModel):
    invoiced: HoursBucket = Field(default_factory=HoursBucket)
    school: HoursBucket = Field(default_factory=HoursBucket)
    charter: HoursBucket = Field(default_factory=HoursBucket)
    demo: HoursBucket = Field(default_factory=HoursBucket)
    ferry: HoursBucket = Field(default_factory=HoursBucket)


class LedgerSummary(CamelModel):
    total_hours_added: Hours
    total_hours_deducted: Hours
    final_balance: Hours
    entry_count: int
    invoice_count: int
    flight_count: int
    hours_by_type: HoursByType


class UserLedgerResponse(CamelModel):
    """Response body of GET /usage/{user_id}/ledger."""
    user_id: str
    ledger_entries: List[LedgerEntry]
    summary: LedgerSummary
