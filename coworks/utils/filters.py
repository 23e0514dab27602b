"""
In-memory filters applied to already-fetched, typed projections.

Catalog and admin list endpoints load the full set once and narrow it here,
so every function in this module is pure.
"""
from typing import Iterable, List, Optional

from coworks.schemas.space import SpaceWithLocation, SpaceCard, CardLocation, SpaceFilters
from coworks.schemas.booking import BookingDetail, BookingSummary
from coworks.schemas.payment import PaymentDetail, PaymentSummary

ALL = "all"


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


# =====================================================================
# CATALOG
# =====================================================================
def space_matches(space: SpaceWithLocation, filters: SpaceFilters) -> bool:
    if _is_set(filters.city) and space.location.city != filters.city:
        return False
    if _is_set(filters.type) and space.type.value != filters.type:
        return False
    # inclusive on both ends
    if space.price_per_month < filters.min_price or space.price_per_month > filters.max_price:
        return False
    return True


def to_card(space: SpaceWithLocation) -> SpaceCard:
    return SpaceCard(
        id=space.id,
        name=space.name,
        type=space.type.value,
        capacity=space.capacity,
        price_per_month=space.price_per_month,
        description=space.description or "",
        image_url=space.image_url or "",
        amenities=list(space.amenities),
        location=CardLocation(
            name=space.location.name,
            city=space.location.city,
            address=space.location.address,
        ),
    )


def filter_spaces(spaces: Iterable[SpaceWithLocation], filters: SpaceFilters) -> List[SpaceCard]:
    return [to_card(s) for s in spaces if space_matches(s, filters)]


def unique_cities(spaces: Iterable[SpaceWithLocation]) -> List[str]:
    return sorted({s.location.city for s in spaces})


# =====================================================================
# ADMIN - BOOKINGS
# =====================================================================
def filter_bookings(
    bookings: Iterable[BookingDetail],
    query: str = "",
    status: str = ALL,
    payment_status: str = ALL,
) -> List[BookingDetail]:
    needle = (query or "").lower()
    result = []

    for b in bookings:
        if needle and not (
            _contains(b.profile.email, needle)
            or _contains(b.profile.full_name, needle)
            or _contains(b.space.name, needle)
            or _contains(b.space.location.name, needle)
        ):
            continue
        if _is_set(status) and b.status != status:
            continue
        if _is_set(payment_status) and b.payment_status != payment_status:
            continue
        result.append(b)

    return result


def summarize_bookings(bookings: List[BookingDetail]) -> BookingSummary:
    def count(status):
        return sum(1 for b in bookings if b.status == status)

    return BookingSummary(
        total=len(bookings),
        pending=count("pending"),
        confirmed=count("confirmed"),
        cancelled=count("cancelled"),
        completed=count("completed"),
        revenue=sum(b.total_amount for b in bookings if b.payment_status == "paid"),
    )


# =====================================================================
# ADMIN - PAYMENTS
# =====================================================================
def filter_payments(
    payments: Iterable[PaymentDetail],
    query: str = "",
    status: str = ALL,
) -> List[PaymentDetail]:
    needle = (query or "").lower()
    result = []

    for p in payments:
        if needle and not (
            _contains(p.razorpay_payment_id, needle)
            or _contains(p.razorpay_order_id, needle)
            or _contains(p.booking.profile.email, needle)
        ):
            continue
        if _is_set(status) and p.status != status:
            continue
        result.append(p)

    return result


def summarize_payments(payments: List[PaymentDetail]) -> PaymentSummary:
    revenue = sum(p.amount for p in payments if p.status == "captured")
    pending = sum(p.amount for p in payments if p.status in ("created", "authorized"))
    refunded = sum(p.refund_amount or p.amount for p in payments if p.status == "refunded")

    return PaymentSummary(
        total_revenue=revenue,
        pending_amount=pending,
        refunded_amount=refunded,
    )
