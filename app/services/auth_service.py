from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from ..models.user import User
from ..core.config import settings
from ..core.exceptions import DuplicateEmailError, InvalidCredentialsError
from ..core.security import (
    verify_password, get_password_hash, create_access_token, UserRole
)
from ..schemas.auth import UserLogin, UserRegister, LoginResponse

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register_user(self, user_data: UserRegister) -> User:
        """Register a new patient."""
        # Check if user already exists
        existing_user = self.get_user_by_email(user_data.email)

        if existing_user:
            raise DuplicateEmailError()

        new_user = User(
            name=user_data.name,
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            role=UserRole.PATIENT,
        )

        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise DuplicateEmailError()
        self.db.refresh(new_user)

        logger.info(f"Registered user {new_user.id} ({new_user.email})")
        return new_user

    def authenticate_user(self, login_data: UserLogin) -> LoginResponse:
        """Authenticate user and return an access token."""
        user = self.get_user_by_email(login_data.email)

        # Same error for unknown email and wrong password
        if not user or not verify_password(login_data.password, user.password_hash):
            logger.info(f"Failed login for {login_data.email}")
            raise InvalidCredentialsError()

        token = create_access_token(user.id, user.role)

        return LoginResponse(
            token=token,
            role=user.role,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def ensure_admin(self, name: str, email: str, password: str) -> User:
        """Create the admin account if no user holds this email yet."""
        user = self.get_user_by_email(email)
        if user:
            return user

        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=UserRole.ADMIN,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Seeded admin user {user.email}")
        return user
