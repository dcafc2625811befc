from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_app_settings, get_token_service
from storefront.config import Settings
from storefront.database import get_db
from storefront.exceptions import (
    InvalidInputError,
    UsernameTakenError,
    InvalidCredentialsError,
    StoreUnavailableError,
)
from storefront.schemas.user import Credentials, RegisterResponse, LoginResponse
from storefront.security import TokenService
from storefront.services.auth_service import AuthService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account. Usernames are unique and case-sensitive."
)
def register(
    credentials: Credentials,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Register a user.

    - **username**: at least 3 characters
    - **password**: at least 6 characters, stored only as a bcrypt hash
    """
    service = UserService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)

    try:
        user_id = service.register(credentials.username, credentials.password)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during registration."
        )

    return RegisterResponse(message="User registered successfully!", user_id=user_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Exchange username and password for a bearer token valid for one hour."
)
def login(
    credentials: Credentials,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """Authenticate and issue a session token."""
    service = AuthService(db, tokens)

    try:
        token, user = service.login(credentials.username, credentials.password)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login."
        )

    return LoginResponse(
        message="Login successful!",
        token=token,
        username=user.username,
        user_id=user.user_id
    )
