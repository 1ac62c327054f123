from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from typing import Dict, List, Optional
from decimal import Decimal

from zein_bus.bookings.schemas import (
    CalendarDate, PaymentType, PricePoint, SelectableDate, TimeOption, TripType
)
from zein_bus.bookings.fare_service import calculate_trip_cost
from zein_bus.bookings.seat_service import MAX_SEATS_PER_BOOKING

class BookingDraft(BaseModel):
    """In-progress booking form.

    Every assignment is validated, so seats stays within 1..4 and never
    exceeds seat_cap, the calculator's value for the current trip type and
    day. The cost is derived from trip type, seats and pickup point on each read.
    """
    model_config = ConfigDict(validate_assignment=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    destination: str = ""
    area: str = ""
    user_id: str = ""
    trip_type: Optional[TripType] = None
    date: Optional[CalendarDate] = None
    start_point: Optional[PricePoint] = None
    seats: Optional[int] = Field(None, ge=1, le=MAX_SEATS_PER_BOOKING)
    seat_cap: int = Field(MAX_SEATS_PER_BOOKING, ge=0)
    end_time: Optional[str] = None
    payment_type: PaymentType = PaymentType.CASH

    @model_validator(mode="after")
    def _seats_within_cap(self):
        if self.seats is not None and self.seats > self.seat_cap:
            raise ValueError(f"Only {self.seat_cap} seat(s) can be booked")
        return self

    @computed_field
    @property
    def computed_cost(self) -> Decimal:
        return calculate_trip_cost(self.trip_type, self.seats, self.start_point)

    def select_trip_type(self, trip_type: TripType) -> None:
        self.trip_type = trip_type
        # Outbound-only trips carry no return slot
        if trip_type is TripType.OUTBOUND:
            self.end_time = None

    def select_seats(self, seats: int, seat_cap: int) -> None:
        if seats > seat_cap:
            raise ValueError(f"Only {seat_cap} seat(s) can be booked")
        # Clear first so a lower cap never conflicts with the previous count
        self.seats = None
        self.seat_cap = seat_cap
        self.seats = seats

    def select_start_point(self, point: Optional[PricePoint]) -> None:
        self.start_point = point

    def select_date(self, day: SelectableDate, available_days: List[SelectableDate]) -> None:
        if day.value not in {d.value for d in available_days}:
            raise ValueError(f"{day.value} is not open for booking")
        self.date = day.as_date()

class BookingContext(BaseModel):
    """Everything the booking page needs to render its choices"""
    booking_open: bool
    notes: Optional[str] = None
    available_days: List[SelectableDate]
    places: List[PricePoint]
    return_times: List[TimeOption]
    seat_caps: Dict[str, int]
    seat_options: Dict[str, List[int]]
    max_seats_per_booking: int = MAX_SEATS_PER_BOOKING
    draft: BookingDraft
