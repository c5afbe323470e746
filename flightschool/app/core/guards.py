"""
Security guards for role-based and ownership-based access control.
"""

from fastapi import Depends
from flightschool.app.core.dependencies import get_current_user
from flightschool.app.core.exceptions import InsufficientPermissionsError
from flightschool.app.schemas.auth import CurrentUser


def can_view_user_data(subject_user_id: str, current_user: CurrentUser) -> bool:
    """
    Administrative roles may view anyone's data; everyone else only their own.
    """
    if current_user.is_admin:
        return True
    return current_user.user_id == subject_user_id


async def require_ledger_access(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """
    Dependency guarding /usage/{user_id}/* routes.

    Runs before the route body, so a rejected request never touches ledger data.

    Raises:
        InsufficientPermissionsError: 403 if not self and not an administrative role
    """
    if not can_view_user_data(user_id, current_user):
        raise InsufficientPermissionsError(
            message="You do not have permission to view this user's ledger",
            details={"user_id": user_id}
        )
    return current_user
