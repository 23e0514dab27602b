from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from coworks.core.dependencies import AdminSession, get_db, get_admin_session
from coworks.core.logging_config import get_logger
from coworks.models.booking import Booking
from coworks.models.location import Location
from coworks.models.space import Space

router = APIRouter(prefix="/admin", tags=["Admin Analytics"])
logger = get_logger()


# =====================================================================
# DASHBOARD STATS
# =====================================================================
@router.get("/stats")
def dashboard_stats(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    total_locations = db.query(func.count(Location.id)).scalar()
    total_spaces = db.query(func.count(Space.id)).scalar()
    total_bookings = db.query(func.count(Booking.id)).scalar()

    revenue = db.query(func.sum(Booking.total_amount)).filter(
        Booking.payment_status == "paid"
    ).scalar()

    thirty_days_ago = datetime.utcnow() - timedelta(days=30)
    recent_bookings = db.query(func.count(Booking.id)).filter(
        Booking.created_at >= thirty_days_ago
    ).scalar()

    logger.bind(log_type="admin", actor=session.email).info("Admin checked dashboard stats")

    return {
        "total_locations": total_locations or 0,
        "total_spaces": total_spaces or 0,
        "total_bookings": total_bookings or 0,
        "total_revenue": float(revenue or 0),
        "recent_bookings": recent_bookings or 0,
    }
