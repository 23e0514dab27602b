from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator


class ProfileBrief(BaseModel):
    """Profile fields joined into booking/payment views"""
    id: int
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileOut(ProfileBrief):
    role: str
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    full_name: str
    phone: str


class SignUp(BaseModel):
    full_name: str
    email: EmailStr
    phone: str
    password: str = Field(min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignIn(BaseModel):
    email: EmailStr
    password: str
