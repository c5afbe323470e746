"""
Usage API Endpoints.

Read-only flight-hour settlement views per user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flightschool.app.db.session import get_db
from flightschool.app.core.guards import require_ledger_access
from flightschool.app.domain.ledger.service import LedgerService
from flightschool.app.schemas.auth import CurrentUser
from flightschool.app.schemas.ledger import UserLedgerResponse

router = APIRouter(prefix="/usage", tags=["Usage - Settlement Ledger"])


@router.get(
    "/{user_id}/ledger",
    response_model=UserLedgerResponse,
    response_model_exclude_none=True,
)
async def get_user_ledger(
    user_id: str,
    current_user: CurrentUser = Depends(require_ledger_access),
    db: AsyncSession = Depends(get_db)
):
    """
    Chronological settlement ledger for a user.

    Combines hour-package invoices (credits) and flights (debits) with a
    running balance, plus per-category flown-hour totals.
    Allowed for the user themself and for administrative roles.
    """
    return await LedgerService.get_user_ledger(db, user_id)
