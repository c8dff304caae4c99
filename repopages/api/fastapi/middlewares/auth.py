from typing import Optional

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from supabase import Client

from repopages.core.database import get_db
from repopages.core.supabase_client import get_supabase_client
from repopages.models.db.users import User
from repopages.utils.exception import UnauthorizedException, UserNotFoundError
from repopages.utils.logging.otel_logger import logger

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    supabase: Client = Depends(get_supabase_client),
) -> User:
    """
    Resolve the caller from a Supabase access token.

    The Authorization header wins over the access_token cookie.

    Raises:
        UnauthorizedException: token missing, invalid or rejected by Supabase
        UserNotFoundError: the Supabase user has no local account
    """
    token = authorization.credentials if authorization else access_token
    if not token:
        logger.warning("No token found in Authorization header or cookies")
        raise UnauthorizedException("Authentication token is missing")

    try:
        auth_response = supabase.auth.get_user(token)
    except Exception as e:
        logger.error(f"Supabase rejected access token: {e}")
        raise UnauthorizedException("Could not validate credentials")

    supabase_user = auth_response.user if auth_response else None
    if not supabase_user:
        logger.warning("No user found in Supabase auth response")
        raise UnauthorizedException("Invalid token or user not found")

    local_user = db.query(User).filter(User.email == supabase_user.email).first()
    if not local_user:
        logger.warning(f"User {supabase_user.email} not found in local database")
        raise UserNotFoundError("Authenticated user not found in our database")

    request.state.user = local_user
    return local_user
