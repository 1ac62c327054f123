"""
Booking Module

Booking eligibility and pricing for bus trips between residential areas and
the university, plus the booking flow built on top of it.

Key Components:
- calendar_service.py: which days of the booking window can be booked
- fare_service.py: trip cost from trip type, seats and pickup point fares
- seat_service.py: seat cap offered for a new booking
- validation.py: booking form validation and submission payload
- draft.py: in-progress booking form with an always-current cost
- booking_service.py: booking page context, quotes, submission, trips, cancellation
- router.py: FastAPI endpoints
- schemas.py: Pydantic models for the booking domain
"""

from .schemas import (
    TripType, PaymentType, TripStatus, BookingErrorCode, PricePoint,
    BookingWindowConfig, SeatAvailabilitySnapshot, SelectableDate,
    BookingFormData, BookingSubmission, BookingValidationError,
    BookingSubmissionResult
)
from .calendar_service import generate_available_days
from .fare_service import calculate_trip_cost
from .seat_service import calculate_available_seats, MAX_SEATS_PER_BOOKING
from .draft import BookingDraft
from .validation import BookingFormValidator

__all__ = [
    "TripType",
    "PaymentType",
    "TripStatus",
    "BookingErrorCode",
    "PricePoint",
    "BookingWindowConfig",
    "SeatAvailabilitySnapshot",
    "SelectableDate",
    "BookingFormData",
    "BookingSubmission",
    "BookingValidationError",
    "BookingSubmissionResult",
    "generate_available_days",
    "calculate_trip_cost",
    "calculate_available_seats",
    "MAX_SEATS_PER_BOOKING",
    "BookingDraft",
    "BookingFormValidator"
]
