from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from typing import Annotated, List, Optional, Literal, Union, Any
from datetime import datetime, date, time
from decimal import Decimal
from enum import Enum

CalendarDate = date

DEFAULT_TIME = "09:00"

class TripType(str, Enum):
    """Trip direction; values are the text stored by the backend"""
    OUTBOUND = "ذهاب"
    RETURN = "عودة"
    ROUND_TRIP = "ذهاب وعودة"

    @classmethod
    def parse(cls, value: Any) -> Optional["TripType"]:
        """Accept a member, its stored text or its name; anything else is None"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        text = value.strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        return None

    @property
    def needs_start_point(self) -> bool:
        return self is not TripType.RETURN

    @property
    def needs_return_time(self) -> bool:
        return self is not TripType.OUTBOUND

class PaymentType(str, Enum):
    """Payment type enumeration"""
    CASH = "cash"
    CARD = "card"
    WALLET = "wallet"

class TripStatus(str, Enum):
    """Trip status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class BookingErrorCode(str, Enum):
    """Reasons a booking form is rejected before submission"""
    CONFIG_UNAVAILABLE = "CONFIG_UNAVAILABLE"
    MISSING_TRIP_TYPE = "MISSING_TRIP_TYPE"
    MISSING_START_POINT = "MISSING_START_POINT"
    INVALID_SEAT_COUNT = "INVALID_SEAT_COUNT"
    SEAT_COUNT_EXCEEDS_PER_BOOKING_LIMIT = "SEAT_COUNT_EXCEEDS_PER_BOOKING_LIMIT"
    SEAT_COUNT_EXCEEDS_AVAILABILITY = "SEAT_COUNT_EXCEEDS_AVAILABILITY"
    MISSING_DATE = "MISSING_DATE"
    MISSING_RETURN_TIME = "MISSING_RETURN_TIME"

def normalize_time(value: Any) -> Optional[str]:
    """Reduce a time value ("7:30", "07:30:00.000", time) to "HH:MM", or None if unusable"""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    hour_text, minute_text = parts[0], parts[1][:2]
    if not (hour_text.isdigit() and minute_text.isdigit()):
        return None
    hour, minute = int(hour_text), int(minute_text)
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"

# Pricing
class PricePoint(BaseModel):
    """Pickup location with its own fare table; missing prices fall back to defaults"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", validation_alias=AliasChoices("name", "place_name"))
    one_way_price: Optional[Decimal] = None
    return_price: Optional[Decimal] = None
    round_trip_price: Optional[Decimal] = None
    timing: List[str] = Field(default_factory=list)

    @field_validator("timing", mode="before")
    @classmethod
    def _timing_list(cls, v):
        return v or []

# Departure time: the backend stores either a bare time or a list of label/value options
class TimeOption(BaseModel):
    label: str
    value: str

class SingleDepartureTime(BaseModel):
    kind: Literal["single"] = "single"
    time: str

class DepartureTimeOptions(BaseModel):
    kind: Literal["options"] = "options"
    options: List[TimeOption] = Field(default_factory=list)

DepartureTime = Annotated[
    Union[SingleDepartureTime, DepartureTimeOptions],
    Field(discriminator="kind")
]

def parse_departure_time(raw: Any) -> Optional[Union[SingleDepartureTime, DepartureTimeOptions]]:
    """Build the tagged union from the raw backend value"""
    if raw is None:
        return None
    if isinstance(raw, (SingleDepartureTime, DepartureTimeOptions)):
        return raw
    if isinstance(raw, dict) and raw.get("kind") == "single":
        return SingleDepartureTime(time=str(raw.get("time") or ""))
    if isinstance(raw, dict) and raw.get("kind") == "options":
        raw = raw.get("options") or []
    if isinstance(raw, str):
        return SingleDepartureTime(time=raw)
    if isinstance(raw, list):
        options = []
        for item in raw:
            if isinstance(item, str):
                options.append(TimeOption(label=item, value=item))
            elif isinstance(item, dict) and item.get("value"):
                value = str(item["value"])
                options.append(TimeOption(label=str(item.get("label") or value), value=value))
        return DepartureTimeOptions(options=options)
    return None

def resolve_departure_time(departure: Optional[Union[SingleDepartureTime, DepartureTimeOptions]]) -> str:
    """Departure time submitted with a booking; "09:00" when absent or malformed"""
    if isinstance(departure, SingleDepartureTime):
        return normalize_time(departure.time) or DEFAULT_TIME
    if isinstance(departure, DepartureTimeOptions) and departure.options:
        return normalize_time(departure.options[0].value) or DEFAULT_TIME
    return DEFAULT_TIME

# Booking window
class BookingWindowConfig(BaseModel):
    """Booking dashboard snapshot published by the backend"""
    booking_status: bool = False
    booking_start_date: Optional[CalendarDate] = None
    booking_days_count: Optional[int] = Field(None, ge=0)
    cancel_friday_booking: bool = False
    end_of_day_time: Optional[str] = None
    available_bookings_count: int = 0
    departure_time: Optional[DepartureTime] = None
    notes: Optional[str] = None

    @field_validator("booking_start_date", mode="before")
    @classmethod
    def _blank_date(cls, v):
        if isinstance(v, str):
            v = v.strip()[:10]
            return v or None
        return v

    @field_validator("booking_status", "cancel_friday_booking", mode="before")
    @classmethod
    def _null_flag(cls, v):
        return bool(v)

    @field_validator("available_bookings_count", mode="before")
    @classmethod
    def _null_count(cls, v):
        return v or 0

    @field_validator("departure_time", mode="before")
    @classmethod
    def _tag_departure_time(cls, v):
        return parse_departure_time(v)

    @property
    def start_date(self) -> Optional[CalendarDate]:
        return self.booking_start_date

    @property
    def days_count(self) -> Optional[int]:
        return self.booking_days_count

    @property
    def cancel_friday(self) -> bool:
        return self.cancel_friday_booking

    @property
    def end_of_day_cutoff(self) -> Optional[str]:
        return self.end_of_day_time

    def return_time_options(self) -> List[TimeOption]:
        """Time slots offered for the return leg"""
        if isinstance(self.departure_time, DepartureTimeOptions):
            return list(self.departure_time.options)
        if isinstance(self.departure_time, SingleDepartureTime) and self.departure_time.time:
            return [TimeOption(label=self.departure_time.time, value=self.departure_time.time)]
        return []

class SeatAvailabilitySnapshot(BaseModel):
    """Aggregate seat counters for one booking window"""
    total_capacity: int = 0
    outbound_booked: int = 0
    return_booked: int = 0

class SelectableDate(BaseModel):
    """A bookable day: sortable key plus display label"""
    value: str
    label: str

    def as_date(self) -> CalendarDate:
        return date.fromisoformat(self.value)

# Booking form and submission
class BookingFormData(BaseModel):
    """Booking form as posted by the client; everything is optional until validated"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[str] = None
    trip_type: Optional[str] = None
    area: Optional[str] = None
    start_point: Optional[str] = None
    end_time: Optional[str] = None
    seats: Optional[str] = None
    payment_type: PaymentType = PaymentType.CASH
    user_id: Optional[str] = None

    @field_validator("seats", "date", "user_id", mode="before")
    @classmethod
    def _as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, date)):
            return v.isoformat() if isinstance(v, date) else str(v)
        return v

class BookingSubmission(BaseModel):
    """Payload for the backend createBooking mutation"""
    first_name: str
    last_name: str
    email: str
    phone: str
    destination: str
    date: CalendarDate
    trip_type: TripType
    trip_cost: Decimal
    area: str
    start_point: str
    start_time: str
    end_time: str
    seats: int
    payment_type: PaymentType
    user_id: str
    published_at: datetime

    def to_variables(self) -> dict:
        """GraphQL variables for the CreateBooking mutation"""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "destination": self.destination,
            "date": self.date.isoformat(),
            "tripType": self.trip_type.value,
            "tripCost": float(self.trip_cost),
            "area": self.area,
            "startPoint": self.start_point,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "seats": self.seats,
            "paymentType": self.payment_type.value,
            "userId": self.user_id,
            "publishedAt": self.published_at.isoformat(),
        }

class BookingValidationError(BaseModel):
    """First rule a booking form failed"""
    error_code: BookingErrorCode
    error_message: str
    field: Optional[str] = None
    details: Optional[str] = None

class BookingCreated(BaseModel):
    id: str
    date: Optional[CalendarDate] = None
    published_at: Optional[datetime] = None

class BookingSubmissionResult(BaseModel):
    """Outcome of a submission attempt"""
    accepted: bool
    booking: Optional[BookingCreated] = None
    error: Optional[BookingValidationError] = None
    backend_error: Optional[str] = None
    submission: Optional[BookingSubmission] = None

# Existing bookings
class BookingRecord(BaseModel):
    """Booking as stored by the backend"""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[CalendarDate] = None
    trip_type: Optional[str] = None
    trip_cost: Optional[Decimal] = None
    area: Optional[str] = None
    start_point: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    seats: int = 0
    trip_status: Optional[str] = None
    payment_type: Optional[str] = None
    payment_status: Optional[str] = None

    @field_validator("seats", mode="before")
    @classmethod
    def _null_seats(cls, v):
        return v or 0

    @property
    def is_finished(self) -> bool:
        return self.trip_status in (TripStatus.COMPLETED.value, TripStatus.CANCELLED.value)

class TripsOverview(BaseModel):
    upcoming: List[BookingRecord]
    past: List[BookingRecord]

# Quote and page context
class BookingQuoteRequest(BaseModel):
    trip_type: Optional[str] = None
    seats: Optional[str] = None
    area: Optional[str] = None
    start_point: Optional[str] = None
    date: Optional[CalendarDate] = None

    @field_validator("seats", mode="before")
    @classmethod
    def _seats_text(cls, v):
        return str(v) if isinstance(v, int) else v

class BookingQuote(BaseModel):
    trip_type: Optional[TripType] = None
    seats: int
    trip_cost: Decimal
    seat_cap: int
    start_point: Optional[PricePoint] = None
