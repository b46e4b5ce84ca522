from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr


class User(BaseModel):
    id: int
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    picture: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SignupInput(BaseModel):
    """Profile fields collected on signup."""

    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    picture: Optional[str] = None


class ProviderInfo(BaseModel):
    """External identity provider account the user signed up with."""

    provider: str
    provider_user_id: str


class UserCreateModel(SignupInput):
    """Model for creating a new user."""

    stripe_customer_id: Optional[str] = None


class UserUpdateModel(BaseModel):
    """Partial update; only explicitly set fields are written."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    picture: Optional[str] = None
    stripe_customer_id: Optional[str] = None


class UserCredential(BaseModel):
    id: int
    user_id: int
    provider: str
    provider_user_id: str

    class Config:
        from_attributes = True


class UserCredentialCreateModel(BaseModel):
    user_id: int
    provider: str
    provider_user_id: str
