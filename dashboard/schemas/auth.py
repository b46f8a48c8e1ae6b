"""Auth Schemas — sign-in request body, credential rules and the signed-in user.

Design Decisions:
    - SignInRequest accepts any strings; shape rules live in SignInCredentials
      so a malformed email reads as invalid credentials, not a 400
"""

from pydantic import BaseModel, EmailStr, Field


class SignInRequest(BaseModel):
    email: str
    password: str


class SignInCredentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class AuthenticatedUserResponse(BaseModel):
    id: str
    name: str
    email: str
