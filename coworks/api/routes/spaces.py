from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coworks.core.dependencies import get_db
from coworks.schemas.space import SpaceCard, SpaceFilters, SpaceWithLocation
from coworks.services.catalog import load_active_catalog
from coworks.services.lifecycle import get_bookable_space
from coworks.utils.filters import filter_spaces, unique_cities

router = APIRouter(prefix="/spaces", tags=["Spaces"])


# =====================================================================
# BROWSE CATALOG (city / type / price range)
# =====================================================================
@router.get("/", response_model=list[SpaceCard])
def list_spaces(filters: SpaceFilters = Depends(), db: Session = Depends(get_db)):
    return filter_spaces(load_active_catalog(db), filters)


# =====================================================================
# CITIES FOR THE FILTER PANEL
# =====================================================================
@router.get("/cities", response_model=list[str])
def list_cities(db: Session = Depends(get_db)):
    return unique_cities(load_active_catalog(db))


# =====================================================================
# SPACE DETAILS
# =====================================================================
@router.get("/{space_id}", response_model=SpaceWithLocation)
def get_space(space_id: int, db: Session = Depends(get_db)):
    return get_bookable_space(db, space_id)
