"""
Helpers shared by the endpoints that own a login account (customers and
employees).
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from bilemo.api.user_models import UserCredentials, UserCredentialsUpdate
from bilemo.i18n import _
from bilemo.persistence.models import User
from bilemo.security.roles import Roles
from bilemo.services.validator_service import validator_service
from bilemo.utils.password_hash import hash_password, update_password_hash

DUPLICATE_EMAIL = "This email address is already in use, please choose another one."


def check_account_email(
    db: Session, email: Optional[str], exclude_user_id: Optional[int] = None
) -> List[str]:
    """Violation messages for an account email already taken."""
    return validator_service.check_unique(
        db, User.email, email, _(DUPLICATE_EMAIL), exclude_id=exclude_user_id
    )


def check_account_update(
    db: Session, user: Optional[User], update: Optional[UserCredentialsUpdate]
) -> List[str]:
    """
    Violation messages for a nested account update: a null email and an
    email used by another account are refused.
    """
    if update is None:
        return []
    if "email" not in update.model_fields_set:
        return []
    if update.email is None:
        return [_("%(field)s: this value should not be blank.") % {"field": "user.email"}]
    return check_account_email(db, update.email, user.id if user else None)


def build_account(credentials: UserCredentials, role: Roles) -> User:
    """New login account holding role, with the password hashed."""
    return User(
        email=credentials.email,
        hashed_password=hash_password(credentials.password),
        roles=[role.value],
    )


def apply_account_update(user: User, update: Optional[UserCredentialsUpdate]) -> List[str]:
    """
    Apply a nested account update.  Returns the names of the account
    fields that changed.
    """
    if update is None:
        return []

    changed = []
    if update.email is not None and update.email != user.email:
        user.email = update.email
        changed.append("user.email")

    new_hash = update_password_hash(user.hashed_password, update.password)
    if new_hash != user.hashed_password:
        user.hashed_password = new_hash
        changed.append("user.password")
    return changed
