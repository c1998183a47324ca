from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)

    class Config:
        extra = "forbid"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class TokenClaims(BaseModel):
    """Identity carried by an access token."""
    id: str
    name: str
    email: str


class MessageResponse(BaseModel):
    message: str
