"""
User roles enumeration.

Defines the role types for the flight school portal.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        SUPER_ADMIN: System-level access
        ADMIN: School administration
        BASE_MANAGER: Manages an operating base and its members
        INSTRUCTOR: Flight instructor
        PILOT: Licensed pilot renting aircraft
        STUDENT: Student pilot in training
    """
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    BASE_MANAGER = "BASE_MANAGER"
    INSTRUCTOR = "INSTRUCTOR"
    PILOT = "PILOT"
    STUDENT = "STUDENT"
