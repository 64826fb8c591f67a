from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from comedy_connect.core.errors import ForbiddenError, UnauthorizedError
from comedy_connect.core.roles import Actor, Role
from comedy_connect.core.security import decode_token
from comedy_connect.db.session import get_db
from comedy_connect.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the bearer token to a user. No token means a guest (None)."""
    if credentials is None:
        return None
    subject = decode_token(credentials.credentials)
    if not subject:
        raise UnauthorizedError("Could not validate credentials")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise UnauthorizedError("Could not validate credentials")
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise UnauthorizedError("Could not validate credentials")
    return user


def get_current_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if user is None:
        raise UnauthorizedError()
    return user


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role is not Role.ADMIN:
        raise ForbiddenError("Admin access required")
    return current_user


def to_actor(user: Optional[User]) -> Optional[Actor]:
    if user is None:
        return None
    return Actor(user_id=user.id, role=user.role)


def get_optional_actor(user: Optional[User] = Depends(get_current_user_optional)) -> Optional[Actor]:
    return to_actor(user)


def get_actor(user: User = Depends(get_current_user)) -> Actor:
    return to_actor(user)


def get_admin_actor(user: User = Depends(get_current_admin_user)) -> Actor:
    return to_actor(user)
