from enum import Enum


class UserRole(str, Enum):
    """User roles. Registration always yields CUSTOMER."""

    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"
