from typing import Any, Dict, Mapping, Optional, Union
from decimal import Decimal

from zein_bus.bookings.schemas import PricePoint, TripType

DEFAULT_ONE_WAY_PRICE = Decimal('50')
DEFAULT_RETURN_PRICE = Decimal('50')
DEFAULT_ROUND_TRIP_PRICE = Decimal('90')

DEFAULT_PRICES: Dict[TripType, Decimal] = {
    TripType.OUTBOUND: DEFAULT_ONE_WAY_PRICE,
    TripType.RETURN: DEFAULT_RETURN_PRICE,
    TripType.ROUND_TRIP: DEFAULT_ROUND_TRIP_PRICE,
}

# Fare table column used for each trip type
PRICE_FIELDS: Dict[TripType, str] = {
    TripType.OUTBOUND: "one_way_price",
    TripType.RETURN: "return_price",
    TripType.ROUND_TRIP: "round_trip_price",
}

def parse_seat_count(seats: Any) -> int:
    """Seat count from form input; 0 for empty or non-numeric values"""
    if seats is None or isinstance(seats, bool):
        return 0
    if isinstance(seats, int):
        return seats
    if isinstance(seats, (float, Decimal)):
        return int(seats) if seats == int(seats) else 0
    if isinstance(seats, str):
        text = seats.strip()
        if text.lstrip("+-").isdigit():
            return int(text)
    return 0

def _as_price_point(point: Union[PricePoint, Mapping, None]) -> Optional[PricePoint]:
    if point is None or isinstance(point, PricePoint):
        return point
    return PricePoint.model_validate(dict(point))

def resolve_seat_price(
    trip_type: TripType,
    selected_point: Union[PricePoint, Mapping, None] = None
) -> Decimal:
    """Per-seat price for a trip type at a pickup point, or the system default"""
    point = _as_price_point(selected_point)
    default = DEFAULT_PRICES[trip_type]
    if point is None:
        return default
    price = getattr(point, PRICE_FIELDS[trip_type])
    # Zero is treated like a missing price
    return Decimal(price) if price else default

def calculate_trip_cost(
    trip_type: Union[TripType, str, None],
    seats: Any,
    selected_point: Union[PricePoint, Mapping, None] = None
) -> Decimal:
    """Total cost of a trip: seats x per-seat price.

    Returns 0 when the trip type is missing or unknown, or when seats is
    empty, non-numeric or not positive.
    """
    resolved = TripType.parse(trip_type)
    if resolved is None:
        return Decimal('0')

    seat_count = parse_seat_count(seats)
    if seat_count <= 0:
        return Decimal('0')

    return resolve_seat_price(resolved, selected_point) * seat_count
