from decimal import Decimal

from zein_bus.bookings.fare_service import (
    DEFAULT_ROUND_TRIP_PRICE, calculate_trip_cost, parse_seat_count, resolve_seat_price
)
from zein_bus.bookings.schemas import PricePoint, TripType

def test_default_one_way_price():
    assert calculate_trip_cost("ذهاب", "2", None) == 100

def test_point_round_trip_price():
    assert calculate_trip_cost("ذهاب وعودة", "3", {"round_trip_price": 80}) == 240

def test_empty_seats_cost_nothing():
    assert calculate_trip_cost("عودة", "", None) == 0

def test_missing_trip_type_costs_nothing():
    assert calculate_trip_cost("", "2", None) == 0
    assert calculate_trip_cost(None, "2", None) == 0

def test_unknown_trip_type_costs_nothing():
    assert calculate_trip_cost("express", "2", None) == 0

def test_invalid_seat_counts_cost_nothing():
    assert calculate_trip_cost("ذهاب", "abc", None) == 0
    assert calculate_trip_cost("ذهاب", "0", None) == 0
    assert calculate_trip_cost("ذهاب", "-3", None) == 0
    assert calculate_trip_cost("ذهاب", None, None) == 0

def test_point_fares_by_trip_type(metro_station):
    assert calculate_trip_cost(TripType.OUTBOUND, 2, metro_station) == Decimal("120")
    assert calculate_trip_cost(TripType.ROUND_TRIP, 2, metro_station) == Decimal("200")

def test_missing_point_fare_falls_back_to_default(metro_station):
    # metro station has no return fare
    assert calculate_trip_cost(TripType.RETURN, 2, metro_station) == Decimal("100")

def test_zero_point_fare_falls_back_to_default():
    point = PricePoint(name="free stop", round_trip_price=Decimal("0"))

    assert resolve_seat_price(TripType.ROUND_TRIP, point) == DEFAULT_ROUND_TRIP_PRICE

def test_point_from_backend_mapping():
    point = {"place_name": "كارفور", "one_way_price": 45, "return_price": None}

    assert calculate_trip_cost("ذهاب", "4", point) == Decimal("180")
    assert calculate_trip_cost("عودة", "1", point) == Decimal("50")

def test_trip_type_member_names_are_accepted():
    assert calculate_trip_cost("ROUND_TRIP", "1", None) == Decimal("90")

def test_repeated_calls_agree(metro_station):
    first = calculate_trip_cost("ذهاب", "3", metro_station)
    second = calculate_trip_cost("ذهاب", "3", metro_station)

    assert first == second == Decimal("180")
    assert metro_station.one_way_price == Decimal("60")

def test_parse_seat_count():
    assert parse_seat_count(" 3 ") == 3
    assert parse_seat_count(2) == 2
    assert parse_seat_count(2.0) == 2
    assert parse_seat_count(2.5) == 0
    assert parse_seat_count(True) == 0
    assert parse_seat_count("2.5") == 0
