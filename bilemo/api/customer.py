"""
Customer API endpoints.

Customers are managed by admin accounts; only a super admin may delete
one.  Creating a customer also creates its login account, which gets the
client role.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bilemo.api.account_utils import (
    DUPLICATE_EMAIL,
    apply_account_update,
    build_account,
    check_account_email,
    check_account_update,
)
from bilemo.api.customer_models import (
    CustomerCreate,
    CustomerFields,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
)
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import Customer, User
from bilemo.persistence.repository import customer_repository, customer_user_repository
from bilemo.security.roles import Roles, require_role
from bilemo.services.merge_policy import merge_fields, merged_state
from bilemo.services.pagination_service import (
    PageRequest,
    get_page_request,
    pagination_service,
)
from bilemo.services.validator_service import ValidationFailedError, validator_service
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.api.customer")

router = APIRouter()

require_admin = require_role(
    Roles.ADMIN, "You do not have sufficient rights to manage customers."
)


def _get_customer_or_404(db: Session, customer_id: int) -> Customer:
    customer = customer_repository.find(db, customer_id)
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Customer not found")
        )
    return customer


def _commit(db: Session, customer: Customer):
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Customer rejected by the database: %s", exc)
        raise ValidationFailedError([_(DUPLICATE_EMAIL)]) from exc
    db.refresh(customer)


def _location(request: Request, customer: Customer) -> str:
    return str(request.url_for("get_customer", customer_id=customer.id))


@router.get("/customers", response_model=List[CustomerListResponse])
async def list_customers(
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    One page of customers.
    """
    return pagination_service.list_page(
        db,
        customer_repository,
        page_request,
        lambda row: CustomerListResponse.model_validate(row).model_dump(mode="json"),
    )


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    A customer with its customer users and login account.
    """
    return CustomerResponse.model_validate(_get_customer_or_404(db, customer_id))


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    customer_data: CustomerCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Create a customer together with its login account.
    """
    validator_service.validate_or_raise(
        check_account_email(db, customer_data.user.email)
    )

    customer = Customer(**customer_data.model_dump(exclude={"user"}))
    customer.user = build_account(customer_data.user, Roles.CLIENT)
    db.add(customer)
    _commit(db, customer)
    pagination_service.invalidate(customer_repository.tag)

    logger.info("Customer %s created by %s", customer.id, current_user.email)
    response.headers["Location"] = _location(request, customer)
    return CustomerResponse.model_validate(customer)


@router.put("/customers/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Apply the sent fields to a customer and, when a nested user object is
    sent, to its login account.
    """
    customer = _get_customer_or_404(db, customer_id)

    messages = validator_service.check_validation(
        CustomerFields,
        merged_state(customer, customer_data, CustomerFields, exclude={"user"}),
    )
    messages += check_account_update(db, customer.user, customer_data.user)
    validator_service.validate_or_raise(messages)

    changes = list(merge_fields(customer, customer_data, exclude={"user"}))
    if customer.user is not None:
        changes += apply_account_update(customer.user, customer_data.user)
    _commit(db, customer)
    # Customer users embed the company name
    pagination_service.invalidate(customer_repository.tag, customer_user_repository.tag)

    logger.info(
        "Customer %s updated by %s (%s)",
        customer.id,
        current_user.email,
        ", ".join(sorted(changes)) or "no change",
    )
    response.headers["Location"] = _location(request, customer)
    return CustomerResponse.model_validate(customer)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.SUPER_ADMIN, "You do not have sufficient rights to delete a customer."
        )
    ),
):
    """
    Remove a customer, its login account and all of its customer users.
    """
    customer = _get_customer_or_404(db, customer_id)
    db.delete(customer)
    db.commit()
    pagination_service.invalidate(customer_repository.tag, customer_user_repository.tag)

    logger.info("Customer %s deleted by %s", customer_id, current_user.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
