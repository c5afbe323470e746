"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from flightschool.app.api.v1.endpoints import usage

router = APIRouter()

# Settlement ledger endpoints
router.include_router(usage.router)
