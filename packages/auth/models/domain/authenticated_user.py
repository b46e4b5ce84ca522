from pydantic import BaseModel, EmailStr


class AuthenticatedUser(BaseModel):
    """User context passed through authentication dependencies"""

    user_id: int
    email: EmailStr

    class Config:
        from_attributes = True
