from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from coworks.core.dependencies import AdminSession, get_db, get_admin_session
from coworks.core.logging_config import get_logger
from coworks.models.location import Location
from coworks.models.space import Space
from coworks.schemas.location import LocationCreate, LocationOut
from coworks.schemas.space import SpaceCreate, SpaceWithLocation
from coworks.services.catalog import invalidate_catalog

router = APIRouter(prefix="/admin", tags=["Admin Panel"])
logger = get_logger()


def get_location_or_404(db: Session, location_id: int) -> Location:
    location = db.query(Location).filter(Location.id == location_id).first()
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location


def get_space_or_404(db: Session, space_id: int) -> Space:
    space = db.query(Space).filter(Space.id == space_id).first()
    if not space:
        raise HTTPException(status_code=404, detail="Space not found")
    return space


def require_active_location(db: Session, location_id: int) -> Location:
    location = get_location_or_404(db, location_id)
    if not location.is_active:
        raise HTTPException(status_code=400, detail="Location is not active")
    return location


# ==================================================
# LOCATIONS
# ==================================================
@router.get("/locations", response_model=list[LocationOut])
def list_locations(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    return db.query(Location).order_by(Location.created_at.desc(), Location.id.desc()).all()


@router.get("/locations/active", response_model=list[LocationOut])
def list_active_locations(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    """Locations a new space can be attached to"""
    return (
        db.query(Location)
        .filter(Location.is_active == True)
        .order_by(Location.name)
        .all()
    )


@router.post("/locations", response_model=LocationOut)
def create_location(
    data: LocationCreate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    location = Location(**data.model_dump(), is_active=True)
    db.add(location)
    db.commit()
    db.refresh(location)

    logger.bind(log_type="admin", actor=session.email).info(f"Location {location.id} created")

    return location


@router.put("/locations/{location_id}", response_model=LocationOut)
def update_location(
    location_id: int,
    data: LocationCreate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    location = get_location_or_404(db, location_id)

    for field, value in data.model_dump().items():
        setattr(location, field, value)

    db.commit()
    db.refresh(location)
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(f"Location {location.id} updated")

    return location


@router.delete("/locations/{location_id}")
def deactivate_location(
    location_id: int,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    location = get_location_or_404(db, location_id)

    location.is_active = False
    db.commit()
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(f"Location {location.id} deactivated")

    return {"message": "Location has been deactivated"}


# ==================================================
# SPACES
# ==================================================
@router.get("/spaces", response_model=list[SpaceWithLocation])
def list_spaces(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    return (
        db.query(Space)
        .options(joinedload(Space.location))
        .order_by(Space.created_at.desc(), Space.id.desc())
        .all()
    )


@router.post("/spaces", response_model=SpaceWithLocation)
def create_space(
    data: SpaceCreate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    require_active_location(db, data.location_id)

    space = Space(**data.model_dump(mode="json"), is_active=True)
    db.add(space)
    db.commit()
    db.refresh(space)
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(f"Space {space.id} created")

    return space


@router.put("/spaces/{space_id}", response_model=SpaceWithLocation)
def update_space(
    space_id: int,
    data: SpaceCreate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    space = get_space_or_404(db, space_id)

    if data.location_id != space.location_id:
        require_active_location(db, data.location_id)

    for field, value in data.model_dump(mode="json").items():
        setattr(space, field, value)

    db.commit()
    db.refresh(space)
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(f"Space {space.id} updated")

    return space


@router.delete("/spaces/{space_id}")
def deactivate_space(
    space_id: int,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    space = get_space_or_404(db, space_id)

    space.is_active = False
    db.commit()
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(f"Space {space.id} deactivated")

    return {"message": "Space has been deactivated"}
