"""
Login account models embedded in customer and employee payloads.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr

from bilemo.api.field_types import Password


class UserCredentials(BaseModel):
    """
    Email and plaintext password of a new login account.
    """

    email: EmailStr
    password: Password


class UserCredentialsUpdate(BaseModel):
    """
    Optional new email and/or password.  A password equal to the current
    one leaves the stored hash alone.
    """

    email: Optional[EmailStr] = None
    password: Optional[Password] = None


class UserResponse(BaseModel):
    """Login account as shown in detail views.  The hash is never exposed."""

    email: str
    roles: List[str]

    class Config:
        from_attributes = True
