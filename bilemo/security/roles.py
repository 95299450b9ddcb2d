"""
Roles and permission checking.

Roles are hierarchical: a SUPER_ADMIN is also an ADMIN, an ADMIN is also
a CLIENT, and every account is a USER.  Endpoints declare the role they
need with require_role(); customer-user endpoints additionally apply
check_customer_user_access() to keep clients inside their own customer.
"""

from enum import Enum
from typing import Callable, Dict, Iterable, Set

from fastapi import Depends, HTTPException, status

from bilemo.auth.auth_bearer import get_current_user
from bilemo.i18n import _
from bilemo.persistence.models import CustomerUser, User
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.security.roles")


class Roles(str, Enum):
    """
    Enumeration of the roles an account can hold.  The string values are
    stored as-is in the user.roles column.
    """

    USER = "ROLE_USER"
    CLIENT = "ROLE_CLIENT"
    ADMIN = "ROLE_ADMIN"
    SUPER_ADMIN = "ROLE_SUPER_ADMIN"


# Role -> roles it directly includes
ROLE_HIERARCHY: Dict[Roles, Set[Roles]] = {
    Roles.SUPER_ADMIN: {Roles.ADMIN},
    Roles.ADMIN: {Roles.CLIENT},
    Roles.CLIENT: {Roles.USER},
    Roles.USER: set(),
}


def expand_roles(role_names: Iterable[str]) -> Set[Roles]:
    """
    Return the stored roles plus every role they imply.  Unknown role names
    are ignored.
    """
    pending = []
    for role_name in role_names:
        try:
            pending.append(Roles(role_name))
        except ValueError:
            logger.warning("Ignoring unknown role %s", role_name)
    pending.append(Roles.USER)

    expanded: Set[Roles] = set()
    while pending:
        role = pending.pop()
        if role not in expanded:
            expanded.add(role)
            pending.extend(ROLE_HIERARCHY[role])
    return expanded


def has_role(user: User, role: Roles) -> bool:
    """Check if the account holds role, directly or through the hierarchy."""
    return role in expand_roles(user.get_roles())


def is_client_only(user: User) -> bool:
    """
    True for customer accounts: CLIENT without ADMIN.  Their access to
    customer users is limited to their own customer.
    """
    return has_role(user, Roles.CLIENT) and not has_role(user, Roles.ADMIN)


def require_role(role: Roles, message: str) -> Callable[..., User]:
    """
    Build a FastAPI dependency that returns the current account when it
    holds role and raises 403 with the translated message otherwise.
    """

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_role(current_user, role):
            logger.warning(
                "Access denied to %s: %s required", current_user.email, role.value
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=_(message)
            )
        return current_user

    return dependency


def check_customer_user_access(user: User, customer_user: CustomerUser, message: str):
    """
    Raise 403 when a client account touches a customer user of another
    customer.  Admin accounts are not restricted.
    """
    if is_client_only(user) and user.customer_id != customer_user.customer_id:
        logger.warning(
            "Customer user %s refused to %s (customer mismatch)",
            customer_user.id,
            user.email,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=_(message)
        )
