from typing import Iterable, List, Optional, Union
from datetime import date

from zein_bus.bookings.schemas import (
    BookingRecord, SeatAvailabilitySnapshot, TripStatus, TripType
)

MAX_SEATS_PER_BOOKING = 4

def calculate_available_seats(
    trip_type: Union[TripType, str, None],
    total_available: int,
    outbound_booked: int,
    return_booked: int
) -> int:
    """Seat cap offered for a new booking, clamped to [0, MAX_SEATS_PER_BOOKING].

    A round trip is limited by whichever leg has fewer seats left.
    """
    resolved = TripType.parse(trip_type)
    total = total_available or 0
    outbound_left = total - (outbound_booked or 0)
    return_left = total - (return_booked or 0)

    if resolved is TripType.OUTBOUND:
        remaining = outbound_left
    elif resolved is TripType.RETURN:
        remaining = return_left
    elif resolved is TripType.ROUND_TRIP:
        remaining = min(outbound_left, return_left)
    else:
        remaining = 0

    return max(0, min(remaining, MAX_SEATS_PER_BOOKING))

def seats_for_snapshot(
    trip_type: Union[TripType, str, None],
    snapshot: SeatAvailabilitySnapshot
) -> int:
    return calculate_available_seats(
        trip_type,
        snapshot.total_capacity,
        snapshot.outbound_booked,
        snapshot.return_booked
    )

def seat_options(seat_cap: int) -> List[int]:
    """Seat counts a user may pick, 1..cap"""
    return list(range(1, max(0, min(seat_cap, MAX_SEATS_PER_BOOKING)) + 1))

def aggregate_booked_seats(
    bookings: Iterable[BookingRecord],
    total_capacity: int,
    on_date: Optional[date] = None
) -> SeatAvailabilitySnapshot:
    """Sum seats already booked per leg, ignoring cancelled bookings.

    Round trips occupy a seat on both legs. When on_date is given only
    bookings for that day are counted.
    """
    outbound_booked = 0
    return_booked = 0

    for booking in bookings:
        if booking.trip_status == TripStatus.CANCELLED.value:
            continue
        if on_date is not None and booking.date != on_date:
            continue

        trip_type = TripType.parse(booking.trip_type)
        if trip_type in (TripType.OUTBOUND, TripType.ROUND_TRIP):
            outbound_booked += booking.seats
        if trip_type in (TripType.RETURN, TripType.ROUND_TRIP):
            return_booked += booking.seats

    return SeatAvailabilitySnapshot(
        total_capacity=total_capacity,
        outbound_booked=outbound_booked,
        return_booked=return_booked
    )
