"""
Customer user API endpoints.

Client accounts only see and change the customer users of their own
customer.  Admin accounts see every customer user, may filter the list by
customer and must name the owning customer when creating one.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from bilemo.api.customer_user_models import (
    CustomerUserCreate,
    CustomerUserFields,
    CustomerUserListResponse,
    CustomerUserResponse,
    CustomerUserUpdate,
)
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import CustomerUser, User
from bilemo.persistence.repository import customer_repository, customer_user_repository
from bilemo.security.roles import (
    Roles,
    check_customer_user_access,
    is_client_only,
    require_role,
)
from bilemo.services.merge_policy import merge_fields, merged_state
from bilemo.services.pagination_service import (
    PageRequest,
    get_page_request,
    pagination_service,
)
from bilemo.services.validator_service import validator_service
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.api.customer_user")

router = APIRouter()

FOREIGN_VIEW = "You cannot access this customer user."
FOREIGN_UPDATE = "You cannot update this customer user."
FOREIGN_DELETE = "You cannot delete this customer user."


def _serialize_row(customer_user: CustomerUser) -> dict:
    return CustomerUserListResponse.model_validate(customer_user).model_dump(
        mode="json"
    )


def _get_customer_user_or_404(db: Session, customer_user_id: int) -> CustomerUser:
    customer_user = customer_user_repository.find(db, customer_user_id)
    if customer_user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Customer user not found")
        )
    return customer_user


def _check_customer_exists(db: Session, customer_id: Optional[int]) -> int:
    if customer_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_("The customer_id of the owning customer is required."),
        )
    if customer_repository.find(db, customer_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Customer not found")
        )
    return customer_id


def _own_customer_id(current_user: User) -> int:
    if current_user.customer_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=_("This account is not attached to a customer."),
        )
    return current_user.customer_id


def _location(request: Request, customer_user: CustomerUser) -> str:
    return str(
        request.url_for("get_customer_user", customer_user_id=customer_user.id)
    )


@router.get("/customer-users", response_model=List[CustomerUserListResponse])
async def list_customer_users(
    page_request: PageRequest = Depends(get_page_request),
    customer_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.CLIENT,
            "You do not have sufficient rights to view this list of customer users.",
        )
    ),
):
    """
    One page of customer users.  Client accounts always get their own
    customer's rows; admin accounts get every row unless customer_id is
    given.
    """
    if is_client_only(current_user):
        customer_id = _own_customer_id(current_user)
    elif customer_id is not None:
        _check_customer_exists(db, customer_id)

    if customer_id is None:
        return pagination_service.list_page(
            db, customer_user_repository, page_request, _serialize_row
        )
    return pagination_service.list_page_for_customer(
        db, customer_user_repository, page_request, customer_id, _serialize_row
    )


@router.get(
    "/customer-users/{customer_user_id}", response_model=CustomerUserResponse
)
async def get_customer_user(
    customer_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.CLIENT, "You do not have sufficient rights to view this customer user."
        )
    ),
):
    """
    A single customer user.
    """
    customer_user = _get_customer_user_or_404(db, customer_user_id)
    check_customer_user_access(current_user, customer_user, FOREIGN_VIEW)
    return CustomerUserResponse.model_validate(customer_user)


@router.post(
    "/customer-users",
    response_model=CustomerUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer_user(
    customer_user_data: CustomerUserCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.CLIENT, "You do not have sufficient rights to create a customer user."
        )
    ),
):
    """
    Create a customer user under the caller's customer, or under the
    customer named by customer_id for admin accounts.
    """
    if is_client_only(current_user):
        customer_id = _own_customer_id(current_user)
    else:
        customer_id = _check_customer_exists(db, customer_user_data.customer_id)

    customer_user = CustomerUser(
        **customer_user_data.model_dump(exclude={"customer_id"}),
        customer_id=customer_id,
    )
    db.add(customer_user)
    db.commit()
    db.refresh(customer_user)
    pagination_service.invalidate(customer_user_repository.tag)

    logger.info(
        "Customer user %s created for customer %s by %s",
        customer_user.id,
        customer_id,
        current_user.email,
    )
    response.headers["Location"] = _location(request, customer_user)
    return CustomerUserResponse.model_validate(customer_user)


@router.put(
    "/customer-users/{customer_user_id}", response_model=CustomerUserResponse
)
async def update_customer_user(
    customer_user_id: int,
    customer_user_data: CustomerUserUpdate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.CLIENT, "You do not have sufficient rights to update a customer user."
        )
    ),
):
    """
    Apply the sent fields to a customer user.  Only admin accounts may move
    it to another customer.
    """
    customer_user = _get_customer_user_or_404(db, customer_user_id)
    check_customer_user_access(current_user, customer_user, FOREIGN_UPDATE)

    validator_service.validate_or_raise(
        validator_service.check_validation(
            CustomerUserFields,
            merged_state(
                customer_user,
                customer_user_data,
                CustomerUserFields,
                exclude={"customer_id"},
            ),
        )
    )

    moving = "customer_id" in customer_user_data.model_fields_set and not is_client_only(
        current_user
    )
    if moving:
        _check_customer_exists(db, customer_user_data.customer_id)

    changes = list(merge_fields(customer_user, customer_user_data, exclude={"customer_id"}))
    if moving and customer_user.customer_id != customer_user_data.customer_id:
        customer_user.customer_id = customer_user_data.customer_id
        changes.append("customer_id")
    db.commit()
    db.refresh(customer_user)
    pagination_service.invalidate(customer_user_repository.tag)

    logger.info(
        "Customer user %s updated by %s (%s)",
        customer_user.id,
        current_user.email,
        ", ".join(sorted(changes)) or "no change",
    )
    response.headers["Location"] = _location(request, customer_user)
    return CustomerUserResponse.model_validate(customer_user)


@router.delete(
    "/customer-users/{customer_user_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_customer_user(
    customer_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.CLIENT, "You do not have sufficient rights to delete a customer user."
        )
    ),
):
    """
    Remove a customer user.
    """
    customer_user = _get_customer_user_or_404(db, customer_user_id)
    check_customer_user_access(current_user, customer_user, FOREIGN_DELETE)
    db.delete(customer_user)
    db.commit()
    pagination_service.invalidate(customer_user_repository.tag)

    logger.info("Customer user %s deleted by %s", customer_user_id, current_user.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
