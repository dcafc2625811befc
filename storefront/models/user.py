from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from storefront.database import Base


class User(Base):
    """
    Registered customer account.

    Attributes:
        user_id: Unique identifier for the user
        username: Login name, unique and case-sensitive
        password_hash: bcrypt hash of the password (salt included)
        registration_date: Timestamp when the account was created
    """
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    registration_date = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User(user_id={self.user_id}, username='{self.username}')>"
