from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging

from storefront.models.user import User
from storefront.security import hash_password
from storefront.exceptions import (
    InvalidInputError,
    UsernameTakenError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class UserService:
    """
    Credential store: registers accounts and looks them up by username.

    Username uniqueness is checked before insert for a friendly error, but the
    UNIQUE constraint on ``users.username`` is what actually guarantees it when
    two registrations race.
    """

    def __init__(self, db: Session, bcrypt_rounds: int = 10):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, username: str, password: str) -> int:
        """
        Create a new account.

        Args:
            username: Desired login name (case-sensitive, at least 3 characters)
            password: Plaintext password (at least 6 characters), never stored

        Returns:
            ID of the created user

        Raises:
            InvalidInputError: Missing or too short username/password
            UsernameTakenError: Username already registered
            StoreUnavailableError: Database failure
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required.")
        if len(username) < MIN_USERNAME_LENGTH or len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                "Username must be at least 3 characters and password at least 6 characters long.",
                details={"username_length": len(username)},
            )

        if self.find_by_username(username) is not None:
            raise UsernameTakenError(username)

        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )

        try:
            self.db.add(user)
            self.db.flush()
            user_id = user.user_id
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            self.db.rollback()
            logger.info(f"Username '{username}' taken by a concurrent registration")
            raise UsernameTakenError(username)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error registering user '{username}': {e}")
            raise StoreUnavailableError("Server error during registration.") from e

        logger.info(f"User #{user_id} registered as '{username}'")
        return user_id

    def find_by_username(self, username: str) -> Optional[User]:
        """Get the stored account record for a username, or None."""
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            logger.error(f"Error looking up user '{username}': {e}")
            raise StoreUnavailableError("Server error looking up user.") from e
