"""
This module manages the JWT auth mechanism used by the API.
"""

import time
from typing import Optional

import jwt
import jwt.exceptions

from bilemo.config import config
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.auth.handler")

# Read the YAML file
the_config = config.get_config()

JWT_SECRET = the_config["security"]["jwt_secret"]
JWT_ALGORITHM = the_config["security"]["jwt_algorithm"]


def token_response(token: str):
    """
    Wrap a token in the JSON payload returned by the login endpoint.
    """
    return {"Authorization": token}


def sign_jwt(user_id: str) -> str:
    """
    Sign a token for the account identified by its email.
    """
    payload = {
        "user_id": user_id,
        "expires": time.time() + int(the_config["security"]["jwt_auth_timeout"]),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str) -> Optional[dict]:
    """
    Decode a token.  Returns None when it is malformed, badly signed or
    expired.
    """
    try:
        decoded_token = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.exceptions.InvalidTokenError:
        logger.warning("Rejected an invalid JWT")
        return None

    if decoded_token.get("expires", 0) >= time.time():
        return decoded_token

    logger.info("Rejected an expired JWT")
    return None
