"""
Pydantic models for the customer user API endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from bilemo.api.field_types import CityName, NotBlank, PersonName, PhoneNumber, PostalCode


class CustomerUserFields(BaseModel):
    """Customer user attributes."""

    last_name: PersonName
    first_name: PersonName
    email: EmailStr
    postal_code: PostalCode
    address: NotBlank
    city: CityName
    country: CityName
    phone: PhoneNumber


class CustomerUserCreate(CustomerUserFields):
    """
    Body of POST /customer-users.  customer_id is required from admin
    accounts and ignored for client accounts, which always create under
    their own customer.
    """

    customer_id: Optional[int] = None


class CustomerUserUpdate(BaseModel):
    """Body of PUT /customer-users/{id}; only sent fields are applied."""

    last_name: Optional[PersonName] = None
    first_name: Optional[PersonName] = None
    email: Optional[EmailStr] = None
    postal_code: Optional[PostalCode] = None
    address: Optional[NotBlank] = None
    city: Optional[CityName] = None
    country: Optional[CityName] = None
    phone: Optional[PhoneNumber] = None
    customer_id: Optional[int] = None


class CustomerSummary(BaseModel):
    """Owning customer as embedded in a customer user."""

    id: int
    company: str

    class Config:
        from_attributes = True


class CustomerUserListResponse(BaseModel):
    """Customer user in list pages."""

    id: int
    last_name: str
    first_name: str
    email: str
    customer: CustomerSummary

    class Config:
        from_attributes = True


class CustomerUserResponse(BaseModel):
    """Full customer user."""

    id: int
    last_name: str
    first_name: str
    email: str
    postal_code: str
    address: str
    city: str
    country: str
    phone: str
    created_at: datetime
    customer: CustomerSummary

    class Config:
        from_attributes = True
