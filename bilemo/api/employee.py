"""
Employee API endpoints, reserved to super admin accounts.  A new employee
gets a login account with the admin role.
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
from bilemo.api.employee_models import (
    EmployeeCreate,
    EmployeeFields,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import Employee, User
from bilemo.persistence.repository import employee_repository
from bilemo.security.roles import Roles, require_role
from bilemo.services.merge_policy import merge_fields, merged_state
from bilemo.services.pagination_service import (
    PageRequest,
    get_page_request,
    pagination_service,
)
from bilemo.services.validator_service import ValidationFailedError, validator_service
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.api.employee")

router = APIRouter()

require_super_admin = require_role(
    Roles.SUPER_ADMIN, "You do not have sufficient rights to manage employees."
)


def _get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = employee_repository.find(db, employee_id)
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Employee not found")
        )
    return employee


def _commit(db: Session, employee: Employee):
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Employee rejected by the database: %s", exc)
        raise ValidationFailedError([_(DUPLICATE_EMAIL)]) from exc
    db.refresh(employee)


@router.get("/employees", response_model=List[EmployeeListResponse])
async def list_employees(
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    """One page of employees."""
    return pagination_service.list_page(
        db,
        employee_repository,
        page_request,
        lambda row: EmployeeListResponse.model_validate(row).model_dump(mode="json"),
    )


@router.get("/employees/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    """An employee and its login account."""
    return EmployeeResponse.model_validate(_get_employee_or_404(db, employee_id))


@router.post(
    "/employees",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    employee_data: EmployeeCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    """Create an employee with an admin login account."""
    validator_service.validate_or_raise(
        check_account_email(db, employee_data.user.email)
    )

    employee = Employee(**employee_data.model_dump(exclude={"user"}))
    employee.user = build_account(employee_data.user, Roles.ADMIN)
    db.add(employee)
    _commit(db, employee)
    pagination_service.invalidate(employee_repository.tag)

    logger.info("Employee %s created by %s", employee.id, current_user.email)
    response.headers["Location"] = str(
        request.url_for("get_employee", employee_id=employee.id)
    )
    return EmployeeResponse.model_validate(employee)


@router.put("/employees/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    """Apply the sent fields to an employee and its login account."""
    employee = _get_employee_or_404(db, employee_id)

    messages = validator_service.check_validation(
        EmployeeFields,
        merged_state(employee, employee_data, EmployeeFields, exclude={"user"}),
    )
    messages += check_account_update(db, employee.user, employee_data.user)
    validator_service.validate_or_raise(messages)

    changes = list(merge_fields(employee, employee_data, exclude={"user"}))
    if employee.user is not None:
        changes += apply_account_update(employee.user, employee_data.user)
    _commit(db, employee)
    pagination_service.invalidate(employee_repository.tag)

    logger.info(
        "Employee %s updated by %s (%s)",
        employee.id,
        current_user.email,
        ", ".join(sorted(changes)) or "no change",
    )
    response.headers["Location"] = str(
        request.url_for("get_employee", employee_id=employee.id)
    )
    return EmployeeResponse.model_validate(employee)


@router.delete("/employees/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    """Remove an employee and its login account."""
    employee = _get_employee_or_404(db, employee_id)
    db.delete(employee)
    db.commit()
    pagination_service.invalidate(employee_repository.tag)

    logger.info("Employee %s deleted by %s", employee_id, current_user.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
