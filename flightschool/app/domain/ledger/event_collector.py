"""
Event Collector.

Fetches the two raw event sets of a user's settlement ledger:
hour-package invoice lines (credits) and flights (debits).
Both fetches must succeed; any database failure aborts the ledger.
"""

import logging
from typing import List, Optional, Sequence
from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flightschool.app.core.config import settings
from flightschool.app.core.exceptions import UpstreamFetchError
from flightschool.app.models.invoice import Invoice, InvoiceClient, InvoiceItem
from flightschool.app.models.flight_log import FlightLog
from flightschool.app.models.ledger_enums import CREDITING_INVOICE_STATUSES
from flightschool.app.domain.ledger.records import InvoiceHourLine, FlightRecord, CollectedEvents

logger = logging.getLogger("flightschool.ledger")


class EventCollector:

    def __init__(self, hour_units: Optional[Sequence[str]] = None):
        self.hour_units = list(hour_units or settings.hour_units)

    async def collect(self, db: AsyncSession, user_id: str) -> CollectedEvents:
        """
        Collect invoice hour lines and flights for one user.

        The queries run one after the other on the same session; an
        AsyncSession cannot serve two statements concurrently.

        Raises:
            UpstreamFetchError: if either query fails
        """
        invoice_lines = await self.fetch_invoice_hour_lines(db, user_id)
        flights = await self.fetch_flights(db, user_id)
        return CollectedEvents(invoice_lines=invoice_lines, flights=flights)

    async def fetch_invoice_hour_lines(self, db: AsyncSession, user_id: str) -> List[InvoiceHourLine]:
        """
        Hour lines of paid/imported invoices billed to the user.

        Ordered by issue date, then invoice, then line.
        """
        query = (
            select(Invoice, InvoiceItem)
            .join(InvoiceClient, InvoiceClient.invoice_id == Invoice.id)
            .join(InvoiceItem, InvoiceItem.invoice_id == Invoice.id)
            .where(
                InvoiceClient.user_id == user_id,
                Invoice.status.in_(CREDITING_INVOICE_STATUSES),
                InvoiceItem.unit.in_(self.hour_units),
            )
            .order_by(Invoice.issue_date, Invoice.id, InvoiceItem.line_id, InvoiceItem.id)
        )

        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as exc:
            logger.error("Invoice fetch failed for user %s: %s", user_id, exc)
            raise UpstreamFetchError("invoices", str(exc)) from exc

        return [
            InvoiceHourLine(
                invoice_id=invoice.id,
                smartbill_id=invoice.smartbill_id,
                issue_date=invoice.issue_date,
                currency=invoice.currency,
                line_id=item.line_id,
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                total_amount=item.total_amount,
            )
            for invoice, item in rows
        ]

    async def fetch_flights(self, db: AsyncSession, user_id: str) -> List[FlightRecord]:
        """Flights the user piloted or paid for, ordered by date."""
        query = (
            select(FlightLog)
            .where(or_(FlightLog.pilot_id == user_id, FlightLog.payer_id == user_id))
            .order_by(FlightLog.date, FlightLog.created_at, FlightLog.id)
        )

        try:
            result = await db.execute(query)
            flights = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Flight fetch failed for user %s: %s", user_id, exc)
            raise UpstreamFetchError("flights", str(exc)) from exc

        return [FlightRecord.model_validate(flight) for flight in flights]
