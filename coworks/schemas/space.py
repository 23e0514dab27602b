from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from coworks.models.enums import SpaceType
from coworks.schemas.location import LocationOut


class SpaceBase(BaseModel):
    location_id: int
    name: str
    type: SpaceType = SpaceType.HOTDESK
    capacity: int = Field(default=1, ge=1)
    price_per_month: float = Field(default=0.0, ge=0)
    description: Optional[str] = None
    image_url: Optional[str] = None
    amenities: List[str] = []


class SpaceCreate(SpaceBase):
    pass


class SpaceOut(SpaceBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("amenities", mode="before")
    @classmethod
    def only_strings(cls, value: Any):
        # JSON column may hold anything; keep the string entries only
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]


class SpaceWithLocation(SpaceOut):
    location: LocationOut


# ---- catalog display shape ----
class CardLocation(BaseModel):
    name: str
    city: str
    address: str


class SpaceCard(BaseModel):
    id: int
    name: str
    type: str
    capacity: int
    price_per_month: float
    description: str
    image_url: str
    amenities: List[str]
    location: CardLocation


class SpaceFilters(BaseModel):
    city: str = "all"
    type: str = "all"
    min_price: float = 0
    max_price: float = 200000
