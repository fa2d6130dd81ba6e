# This project was developed with assistance from AI tools.
"""Caller identity schemas."""

from db.enums import UserRole
from pydantic import BaseModel


class UserContext(BaseModel):
    """Identity of the caller as asserted by the upstream gateway."""

    user_id: str
    role: UserRole
    email: str | None = None
    name: str | None = None
