"""
This module is used to verify the JWT token we use for authentication and
to resolve the account behind it.
"""

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bilemo.auth.auth_handler import decode_jwt
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import User


class JWTBearer(HTTPBearer):
    """
    This is a subclass of the FastAPI HTTPBearer class that is used to manage
    authentication via JWT
    """

    def __init__(self, auto_error: bool = True):
        super().__init__(auto_error=auto_error)

    async def __call__(self, request: Request):
        """
        Verify the credential scheme and the token; returns the decoded
        token payload.
        """
        credentials: HTTPAuthorizationCredentials = await super().__call__(request)
        if credentials:
            if not credentials.scheme == "Bearer":
                raise HTTPException(
                    status_code=403, detail=_("Invalid authentication scheme.")
                )
            payload = decode_jwt(credentials.credentials)
            if not payload:
                raise HTTPException(
                    status_code=401, detail=_("Invalid or expired token.")
                )
            return payload

        raise HTTPException(status_code=403, detail=_("Invalid authorization code."))


jwt_bearer = JWTBearer()


def get_current_user(
    payload: dict = Depends(jwt_bearer), db: Session = Depends(get_db)
) -> User:
    """
    Resolve the User row of the bearer token.
    """
    user = db.query(User).filter(User.email == payload.get("user_id")).first()
    if user is None:
        raise HTTPException(status_code=401, detail=_("Invalid or expired token."))
    return user
