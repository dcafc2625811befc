from sqlalchemy.orm import Session
from typing import Tuple
import logging

from storefront.models.user import User
from storefront.security import TokenService, verify_password
from storefront.services.user_service import UserService
from storefront.exceptions import InvalidCredentialsError, InvalidInputError

logger = logging.getLogger(__name__)


class AuthService:
    """Exchanges valid credentials for a signed session token."""

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens
        self.users = UserService(db)

    def login(self, username: str, password: str) -> Tuple[str, User]:
        """
        Authenticate a user.

        Returns:
            Tuple of (token, user)

        Raises:
            InvalidInputError: Missing username or password
            InvalidCredentialsError: Unknown user or wrong password
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required.")

        user = self.users.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for '{username}'")
            raise InvalidCredentialsError(username)

        token = self.tokens.issue(user.user_id, user.username)
        logger.info(f"User #{user.user_id} logged in")
        return token, user
