"""
This module provides the login endpoint that hands out JWT tokens.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from bilemo.auth.auth_handler import sign_jwt, token_response
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import User
from bilemo.utils.password_hash import verify_password
from bilemo.utils.verbosity_logger import get_logger, sanitize_log

logger = get_logger("bilemo.api.auth")

router = APIRouter()


class UserLogin(BaseModel):
    """
    This class represents the JSON payload to the /login_check POST request.
    """

    username: str
    password: str


@router.post("/login_check")
async def login_check(login_data: UserLogin, db: Session = Depends(get_db)):
    """
    Check the credentials and return a signed token for the account.
    """
    user = db.query(User).filter(User.email == login_data.username).first()

    if user and verify_password(user.hashed_password, login_data.password):
        logger.info("Login succeeded for %s", user.email)
        return token_response(sign_jwt(user.email))

    logger.warning("Login failed for %s", sanitize_log(login_data.username))
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_("Invalid username or password"),
    )
