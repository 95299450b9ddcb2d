"""
Pydantic models for the employee API endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bilemo.api.field_types import PersonName, PhoneNumber
from bilemo.api.user_models import UserCredentials, UserCredentialsUpdate, UserResponse


class EmployeeFields(BaseModel):
    """Employee attributes, without the login account."""

    last_name: PersonName
    first_name: PersonName
    phone: PhoneNumber


class EmployeeCreate(EmployeeFields):
    """Body of POST /employees."""

    user: UserCredentials


class EmployeeUpdate(BaseModel):
    """Body of PUT /employees/{id}; only sent fields are applied."""

    last_name: Optional[PersonName] = None
    first_name: Optional[PersonName] = None
    phone: Optional[PhoneNumber] = None
    user: Optional[UserCredentialsUpdate] = None


class EmployeeListResponse(BaseModel):
    """Employee in list pages."""

    id: int
    last_name: str
    first_name: str

    class Config:
        from_attributes = True


class EmployeeResponse(BaseModel):
    """Full employee with its login account."""

    id: int
    last_name: str
    first_name: str
    phone: str
    created_at: datetime
    user: Optional[UserResponse] = None

    class Config:
        from_attributes = True
