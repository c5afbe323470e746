"""
User database models.

This module defines the User model and its role assignments.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from flightschool.app.db.session import Base
from flightschool.app.models.enums import UserRole


class User(Base):
    """
    User model.

    A user may hold several roles at once (e.g. an INSTRUCTOR who is also a PILOT).
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    roles = relationship(
        "UserRoleAssignment",
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def role_names(self):
        return [assignment.role.value for assignment in self.roles]

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class UserRoleAssignment(Base):
    """Link between a user and one of their roles."""
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(Enum(UserRole), nullable=False)

    user = relationship("User", back_populates="roles")

    def __repr__(self):
        return f"<UserRoleAssignment(user_id={self.user_id}, role='{self.role.value}')>"
