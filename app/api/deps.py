from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from ..core.database import get_db
from ..core.security import (
    security, verify_token, MissingTokenError, InvalidTokenError,
    AuthorizationError, UserRole, TokenPayload
)
from ..models.user import User
from ..services.auth_service import AuthService

async def get_current_user_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Extract and verify JWT token from Authorization header."""
    # Missing header, non-Bearer scheme or empty credentials
    if credentials is None:
        raise MissingTokenError()

    token_payload = verify_token(credentials.credentials)
    if not token_payload:
        raise InvalidTokenError()

    if token_payload.token_type != "access":
        raise InvalidTokenError("Unauthorized: Invalid token type")

    return token_payload

async def get_current_user(
    token_payload: TokenPayload = Depends(get_current_user_token),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from database."""
    user = AuthService(db).get_user_by_id(token_payload.sub)
    if not user:
        raise InvalidTokenError("Unauthorized: User not found")

    return user

# Role-based access control dependencies
def require_role(required_role: UserRole):
    """Create a dependency that admits only tokens issued for required_role.

    The role checked is the one embedded in the token when it was issued.
    A role changed in the database afterwards takes effect only once the
    user logs in again.
    """
    async def role_checker(
        token_payload: TokenPayload = Depends(get_current_user_token)
    ) -> TokenPayload:
        if token_payload.role is not required_role:
            raise AuthorizationError()
        return token_payload

    return role_checker

# Specific role dependencies
require_patient = require_role(UserRole.PATIENT)
require_admin = require_role(UserRole.ADMIN)
