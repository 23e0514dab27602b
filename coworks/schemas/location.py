from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LocationBase(BaseModel):
    name: str
    city: str
    address: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class LocationCreate(LocationBase):
    pass


class LocationOut(LocationBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
