from typing import Literal

from pydantic import BaseModel, EmailStr


class AdminBase(BaseModel):
    name: str
    email: EmailStr

    model_config = {"from_attributes": True}


class AdminOut(AdminBase):
    id: int


class AdminAuthRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = None
    action: Literal["login", "logout"] = "login"
