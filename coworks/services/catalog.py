from typing import List

from sqlalchemy.orm import Session, joinedload

from coworks.core.config import CATALOG_CACHE_TTL
from coworks.core.redis import get_cache, set_cache, delete_cache
from coworks.models.location import Location
from coworks.models.space import Space
from coworks.schemas.space import SpaceWithLocation

CATALOG_CACHE_KEY = "catalog:active"


def load_active_catalog(db: Session) -> List[SpaceWithLocation]:
    """Every active space at an active location, newest first."""
    cached = get_cache(CATALOG_CACHE_KEY)
    if cached is not None:
        return [SpaceWithLocation.model_validate(item) for item in cached]

    spaces = (
        db.query(Space)
        .join(Location)
        .options(joinedload(Space.location))
        .filter(Space.is_active == True, Location.is_active == True)
        .order_by(Space.created_at.desc(), Space.id.desc())
        .all()
    )
    catalog = [SpaceWithLocation.model_validate(s) for s in spaces]

    set_cache(
        CATALOG_CACHE_KEY,
        [c.model_dump(mode="json") for c in catalog],
        ttl=CATALOG_CACHE_TTL,
    )
    return catalog


def invalidate_catalog():
    delete_cache(CATALOG_CACHE_KEY)
