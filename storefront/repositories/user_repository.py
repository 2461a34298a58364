import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from storefront.database import is_unique_violation
from storefront.errors import UserAlreadyExistError, UserNotFoundError
from storefront.models.user import User
from storefront.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Store operations the auth service relies on."""

    def create(self, user_data: UserCreate) -> User: ...

    def authenticate(self, email: str, password: str) -> UserResponse: ...

    def get_by_id(self, user_id: str) -> UserResponse: ...

    def delete(self, user_id: str) -> None: ...


class SQLUserRepository:
    """
    User repository backed by SQLAlchemy.

    Passwords are hashed with the injected passlib context before they are
    stored and verified against it on authentication.
    """

    def __init__(self, session_factory: sessionmaker, pwd_context: CryptContext):
        self.session_factory = session_factory
        self.pwd_context = pwd_context

    def create(self, user_data: UserCreate) -> User:
        """
        Store a new user with a hashed password.

        Args:
            user_data: User creation data, password in plain text

        Returns:
            Created user

        Raises:
            UserAlreadyExistError: If the email is already registered
        """
        now = datetime.now(timezone.utc)
        user = User(
            id=str(uuid.uuid4()),
            username=user_data.username,
            email=user_data.email,
            email_verified=user_data.email_verified,
            phone=user_data.phone,
            nickname=user_data.nickname,
            picture=user_data.picture,
            blocked=user_data.blocked,
            password=self.pwd_context.hash(user_data.password),
            created_at=now,
            updated_at=now,
        )

        with self.session_factory() as session:
            session.add(user)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if is_unique_violation(e):
                    logger.warning(f"User {user_data.email} already exists")
                    raise UserAlreadyExistError()
                raise
            session.refresh(user)

        logger.info(f"User {user.id} created")
        return user

    def authenticate(self, email: str, password: str) -> UserResponse:
        """
        Check a user's credentials.

        An unknown email and a wrong password raise the same error.

        Raises:
            UserNotFoundError: If the credentials are invalid
        """
        with self.session_factory() as session:
            user = session.scalars(select(User).where(User.email == email)).first()

        if user is None or not self.pwd_context.verify(password, user.password):
            raise UserNotFoundError()

        return UserResponse.model_validate(user)

    def get_by_id(self, user_id: str) -> UserResponse:
        """Get a user projection by ID or raise UserNotFoundError."""
        with self.session_factory() as session:
            user = session.get(User, user_id)

        if user is None:
            raise UserNotFoundError()
        return UserResponse.model_validate(user)

    def delete(self, user_id: str) -> None:
        """Delete a user. Deleting an unknown user is not an error."""
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                return
            session.delete(user)
            session.commit()

        logger.info(f"User {user_id} deleted")
