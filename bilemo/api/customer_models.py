"""
Pydantic models for the customer API endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from bilemo.api.field_types import (
    CityName,
    NotBlank,
    PersonName,
    PhoneNumber,
    PostalCode,
    SpecText,
)
from bilemo.api.user_models import UserCredentials, UserCredentialsUpdate, UserResponse


class CustomerFields(BaseModel):
    """Customer attributes, without the login account."""

    company: NotBlank
    last_name: PersonName
    first_name: PersonName
    postal_code: PostalCode
    address: NotBlank
    city: CityName
    country: CityName
    phone: PhoneNumber
    tva_number: Optional[SpecText] = None
    siret: Optional[SpecText] = None


class CustomerCreate(CustomerFields):
    """Body of POST /customers."""

    user: UserCredentials


class CustomerUpdate(BaseModel):
    """Body of PUT /customers/{id}; only sent fields are applied."""

    company: Optional[NotBlank] = None
    last_name: Optional[PersonName] = None
    first_name: Optional[PersonName] = None
    postal_code: Optional[PostalCode] = None
    address: Optional[NotBlank] = None
    city: Optional[CityName] = None
    country: Optional[CityName] = None
    phone: Optional[PhoneNumber] = None
    tva_number: Optional[SpecText] = None
    siret: Optional[SpecText] = None
    user: Optional[UserCredentialsUpdate] = None


class CustomerUserSummary(BaseModel):
    """Customer user as listed inside its customer."""

    id: int
    last_name: str
    first_name: str
    email: str

    class Config:
        from_attributes = True


class CustomerListResponse(BaseModel):
    """Customer in list pages."""

    id: int
    company: str
    last_name: str
    first_name: str
    phone: str

    class Config:
        from_attributes = True


class CustomerResponse(BaseModel):
    """Full customer, with its customer users and login account."""

    id: int
    company: str
    last_name: str
    first_name: str
    postal_code: str
    address: str
    city: str
    country: str
    phone: str
    tva_number: Optional[str] = None
    siret: Optional[str] = None
    created_at: datetime
    customer_users: List[CustomerUserSummary] = []
    user: Optional[UserResponse] = None

    class Config:
        from_attributes = True
