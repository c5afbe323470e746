"""
Authentication Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from flightschool.app.core.config import settings


class CurrentUser(BaseModel):
    """
    Verified identity of the requester.

    Built by the get_current_user dependency from the token subject and the
    role set currently stored for that user.
    """
    user_id: str = Field(..., description="Requester user ID")
    email: Optional[str] = Field(default=None, description="Email address")
    roles: List[str] = Field(default_factory=list, description="Role names held by the requester")

    @property
    def is_admin(self) -> bool:
        return any(role in settings.admin_roles for role in self.roles)
