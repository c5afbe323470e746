"""
Settlement Ledger Service (Domain Logic).

Builds a user's flight-hour settlement ledger:
1. Collect invoice hour lines and flights (EventCollector)
2. Apply the deduction policy to every flight (DeductionPolicy)
3. Merge and fold the running balance (LedgerBuilder)
4. Aggregate category totals from the raw flights (SummaryAggregator)

Read-only: nothing is written, cached or retried.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from flightschool.app.domain.ledger.records import CollectedEvents
from flightschool.app.domain.ledger.event_collector import EventCollector
from flightschool.app.domain.ledger.deduction_policy import build_flight_entry
from flightschool.app.domain.ledger.ledger_builder import LedgerBuilder, build_invoice_entry
from flightschool.app.domain.ledger.summary import SummaryAggregator, involves
from flightschool.app.schemas.ledger import UserLedgerResponse

logger = logging.getLogger("flightschool.ledger")


class LedgerService:

    @staticmethod
    def build_user_ledger(user_id: str, events: CollectedEvents) -> UserLedgerResponse:
        """Pure ledger computation over an already collected snapshot."""
        credits = [build_invoice_entry(line) for line in events.invoice_lines]
        debits = [
            build_flight_entry(flight, user_id)
            for flight in events.flights
            if involves(flight, user_id)
        ]

        ledger = LedgerBuilder.build(credits, debits)
        summary = SummaryAggregator.summarize(ledger.entries, events.flights, user_id)

        return UserLedgerResponse(
            user_id=user_id,
            ledger_entries=ledger.entries,
            summary=summary,
        )

    @staticmethod
    async def get_user_ledger(
        db: AsyncSession,
        user_id: str,
        collector: Optional[EventCollector] = None,
    ) -> UserLedgerResponse:
        """
        Collect the user's events and build the ledger.

        Raises:
            UpstreamFetchError: if invoices or flights cannot be fetched
        """
        collector = collector or EventCollector()
        events = await collector.collect(db, user_id)

        response = LedgerService.build_user_ledger(user_id, events)

        logger.debug(
            "Ledger built for user %s: %d entries, final balance %s",
            user_id,
            response.summary.entry_count,
            response.summary.final_balance,
        )
        return response
