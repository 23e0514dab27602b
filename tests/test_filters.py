from datetime import datetime

import pytest

from coworks.schemas.booking import BookingDetail
from coworks.schemas.payment import PaymentDetail
from coworks.schemas.space import SpaceFilters, SpaceWithLocation
from coworks.utils.filters import (
    filter_bookings,
    filter_payments,
    filter_spaces,
    space_matches,
    summarize_bookings,
    summarize_payments,
    unique_cities,
)

NOW = datetime(2027, 1, 10, 9)


def location(id, city, name=None, active=True):
    return {
        "id": id,
        "name": name or f"{city} Hub",
        "city": city,
        "address": f"{id} Main Road",
        "is_active": active,
        "created_at": NOW,
    }


def space(id, city, type, price, **extra):
    data = {
        "id": id,
        "location_id": id,
        "name": f"Space {id}",
        "type": type,
        "capacity": 4,
        "price_per_month": price,
        "amenities": ["wifi"],
        "is_active": True,
        "created_at": NOW,
        "location": location(id, city),
    }
    data.update(extra)
    return SpaceWithLocation.model_validate(data)


CATALOG = [
    space(1, "Bengaluru", "hotdesk", 8000),
    space(2, "Bengaluru", "meeting_room", 15000),
    space(3, "Pune", "private_office", 45000),
    space(4, "Mumbai", "hotdesk", 12000),
    space(5, "Pune", "meeting_room", 200000),
]


@pytest.mark.parametrize("filters", [
    SpaceFilters(),
    SpaceFilters(city="Pune"),
    SpaceFilters(type="hotdesk"),
    SpaceFilters(min_price=10000, max_price=50000),
    SpaceFilters(city="Bengaluru", type="meeting_room", min_price=15000, max_price=15000),
    SpaceFilters(city="Chennai"),
])
def test_filtered_catalog_is_subset_satisfying_predicates(filters):
    result = filter_spaces(CATALOG, filters)
    ids = {s.id for s in CATALOG}

    for card in result:
        assert card.id in ids
        if filters.city != "all":
            assert card.location.city == filters.city
        if filters.type != "all":
            assert card.type == filters.type
        assert filters.min_price <= card.price_per_month <= filters.max_price

    assert len(result) == sum(1 for s in CATALOG if space_matches(s, filters))


def test_price_bounds_are_inclusive():
    result = filter_spaces(CATALOG, SpaceFilters(min_price=8000, max_price=15000))

    assert {c.id for c in result} == {1, 2, 4}


def test_default_max_price_keeps_top_of_range():
    assert 5 in {c.id for c in filter_spaces(CATALOG, SpaceFilters())}


def test_card_shape_defaults_missing_text_and_drops_non_string_amenities():
    odd = space(9, "Goa", "hotdesk", 5000, amenities=["wifi", 3, None, "lockers"])
    card = filter_spaces([odd], SpaceFilters())[0]

    assert card.description == ""
    assert card.image_url == ""
    assert card.amenities == ["wifi", "lockers"]
    assert card.location.city == "Goa"


def test_unique_cities_sorted():
    assert unique_cities(CATALOG) == ["Bengaluru", "Mumbai", "Pune"]


# ---------------- ADMIN LISTS ----------------
def booking(id, email, full_name, status="pending", payment_status="pending", space_name="Desk Row A"):
    return BookingDetail.model_validate({
        "id": id,
        "user_id": id,
        "space_id": 1,
        "start_time": NOW,
        "end_time": NOW,
        "total_hours": 744,
        "total_amount": 15000,
        "status": status,
        "payment_status": payment_status,
        "created_at": NOW,
        "profile": {"id": id, "email": email, "full_name": full_name},
        "space": {**space(1, "Bengaluru", "hotdesk", 15000).model_dump(), "name": space_name},
    })


BOOKINGS = [
    booking(1, "alice@startup.in", "Alice Rao", status="confirmed", payment_status="paid"),
    booking(2, "bob@agency.in", "Bob Malik"),
    booking(3, "Alice@Freelance.dev", None, status="cancelled", payment_status="refunded"),
    booking(4, "carol@studio.in", "Carol Alice", space_name="Boardroom"),
]


def test_search_alice_at_matches_email_only_case_insensitively():
    result = filter_bookings(BOOKINGS, "alice@")

    assert [b.id for b in result] == [1, 3]
    assert all("alice@" in b.profile.email.lower() for b in result)


def test_search_uppercase_query():
    assert [b.id for b in filter_bookings(BOOKINGS, "ALICE@")] == [1, 3]


def test_search_covers_name_space_and_location():
    assert [b.id for b in filter_bookings(BOOKINGS, "malik")] == [2]
    assert [b.id for b in filter_bookings(BOOKINGS, "boardroom")] == [4]
    assert len(filter_bookings(BOOKINGS, "bengaluru hub")) == 4


def test_status_filters_combine_with_search():
    assert [b.id for b in filter_bookings(BOOKINGS, "alice", status="cancelled")] == [3]
    assert [b.id for b in filter_bookings(BOOKINGS, "", payment_status="paid")] == [1]
    assert filter_bookings(BOOKINGS, "bob", status="confirmed") == []


def test_booking_summary_counts_statuses():
    summary = summarize_bookings(BOOKINGS)

    assert summary.total == 4
    assert summary.pending == 2
    assert summary.confirmed == 1
    assert summary.cancelled == 1
    assert summary.completed == 0
    # only booking 1 is paid
    assert summary.revenue == 15000


def payment(id, status, amount, order_id, payment_id=None, refund_amount=None, email="alice@startup.in"):
    return PaymentDetail.model_validate({
        "id": id,
        "booking_id": id,
        "amount": amount,
        "currency": "INR",
        "status": status,
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "refund_amount": refund_amount,
        "created_at": NOW,
        "booking": booking(id, email, "Someone").model_dump(),
    })


PAYMENTS = [
    payment(1, "captured", 45000, "order_AAA", "pay_111"),
    payment(2, "created", 15000, "order_BBB"),
    payment(3, "authorized", 5000, "order_CCC", "pay_333", email="bob@agency.in"),
    payment(4, "refunded", 30000, "order_DDD", "pay_444", refund_amount=10000),
    payment(5, "refunded", 8000, "order_EEE", "pay_555"),
]


def test_payment_search_by_gateway_ids_and_email():
    assert [p.id for p in filter_payments(PAYMENTS, "PAY_333")] == [3]
    assert [p.id for p in filter_payments(PAYMENTS, "order_bbb")] == [2]
    assert [p.id for p in filter_payments(PAYMENTS, "bob@")] == [3]
    assert [p.id for p in filter_payments(PAYMENTS, "", status="refunded")] == [4, 5]


def test_payment_summary():
    summary = summarize_payments(PAYMENTS)

    assert summary.total_revenue == 45000
    assert summary.pending_amount == 20000
    assert summary.refunded_amount == 18000
