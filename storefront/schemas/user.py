from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Schema for register and login requests. Length rules live in the service."""
    username: str = Field(..., description="Account name (at least 3 characters)")
    password: str = Field(..., description="Plaintext password (at least 6 characters)")


class RegisterResponse(BaseModel):
    message: str
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class LoginResponse(BaseModel):
    """Schema for a successful login, including the bearer token."""
    message: str
    token: str
    username: str
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)
