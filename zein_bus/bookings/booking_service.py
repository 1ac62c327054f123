import asyncio
import logging
from typing import List, Optional
from datetime import date, datetime
from zoneinfo import ZoneInfo

from zein_bus.config import settings
from zein_bus.areas.service import AreaService
from zein_bus.auth.session import UserSession
from zein_bus.backend.client import BackendClient
from zein_bus.bookings.calendar_service import generate_available_days, parse_start_date
from zein_bus.bookings.draft import BookingContext, BookingDraft
from zein_bus.bookings.fare_service import calculate_trip_cost, parse_seat_count
from zein_bus.bookings.schemas import (
    BookingFormData, BookingQuote, BookingQuoteRequest, BookingRecord,
    BookingSubmissionResult, BookingWindowConfig, SeatAvailabilitySnapshot,
    SelectableDate, TripStatus, TripType, TripsOverview
)
from zein_bus.bookings.seat_service import (
    aggregate_booked_seats, seat_options, seats_for_snapshot
)
from zein_bus.bookings.validation import BookingFormValidator

logger = logging.getLogger(__name__)

class BookingNotFoundError(LookupError):
    pass

class BookingNotCancellableError(ValueError):
    pass

def current_time() -> datetime:
    """Now in the operator's timezone; the booking window is defined in local days"""
    return datetime.now(ZoneInfo(settings.TIMEZONE))

class BookingService:
    """Booking flow for one signed-in commuter, on top of the backend client"""

    def __init__(
        self,
        client: BackendClient,
        session: UserSession,
        aggregate_booked_seats: Optional[bool] = None
    ):
        self.client = client
        self.session = session
        self.aggregate_booked_seats = (
            settings.AGGREGATE_BOOKED_SEATS if aggregate_booked_seats is None else aggregate_booked_seats
        )

    @staticmethod
    def available_days(window: BookingWindowConfig, now: Optional[datetime] = None) -> List[SelectableDate]:
        return generate_available_days(
            window.start_date,
            window.days_count,
            window.cancel_friday,
            window.end_of_day_cutoff,
            now=now or current_time()
        )

    async def seat_snapshot(
        self,
        window: BookingWindowConfig,
        on_date: Optional[date] = None
    ) -> SeatAvailabilitySnapshot:
        """Seat counters for a day.

        Unless aggregation is enabled the booked counters stay at zero and the
        dashboard's available_bookings_count is the only limit.
        """
        if not self.aggregate_booked_seats or on_date is None:
            return SeatAvailabilitySnapshot(total_capacity=window.available_bookings_count)
        bookings = await self.client.fetch_bookings_on(on_date)
        return aggregate_booked_seats(bookings, window.available_bookings_count, on_date)

    async def get_context(self, now: Optional[datetime] = None) -> BookingContext:
        """Booking page state, with a draft prefilled from the user's profile"""
        window, areas, user = await asyncio.gather(
            self.client.fetch_booking_window(),
            self.client.fetch_areas(),
            self.client.fetch_user(self.session.user_id)
        )

        available_days = self.available_days(window, now)
        places = AreaService.places_in_area(areas, user.area)
        first_day = available_days[0].as_date() if available_days else None

        draft = BookingDraft(
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            email=user.email or "",
            phone=user.phone_number or "",
            destination=user.university or settings.DEFAULT_DESTINATION,
            area=user.area or "",
            user_id=user.id,
            start_point=AreaService.find_place(places, user.start_point),
            date=first_day
        )

        snapshot = await self.seat_snapshot(window, first_day)
        seat_caps = {t.value: seats_for_snapshot(t, snapshot) for t in TripType}
        options = {trip_type: seat_options(cap) for trip_type, cap in seat_caps.items()}

        return BookingContext(
            booking_open=window.booking_status,
            notes=window.notes,
            available_days=available_days,
            places=places,
            return_times=window.return_time_options(),
            seat_caps=seat_caps,
            seat_options=options,
            draft=draft
        )

    async def quote(self, request: BookingQuoteRequest) -> BookingQuote:
        """Price and seat cap for a prospective booking"""
        window, areas = await asyncio.gather(
            self.client.fetch_booking_window(),
            self.client.fetch_areas()
        )
        area = request.area
        if not area and request.start_point:
            area = (await self.client.fetch_user(self.session.user_id)).area

        point = AreaService.find_place(AreaService.places_in_area(areas, area), request.start_point)
        trip_type = TripType.parse(request.trip_type)
        snapshot = await self.seat_snapshot(window, request.date)

        return BookingQuote(
            trip_type=trip_type,
            seats=max(parse_seat_count(request.seats), 0),
            trip_cost=calculate_trip_cost(trip_type, request.seats, point),
            seat_cap=seats_for_snapshot(trip_type, snapshot),
            start_point=point
        )

    async def create_booking(
        self,
        form: BookingFormData,
        now: Optional[datetime] = None
    ) -> BookingSubmissionResult:
        """Validate the form against the live dashboard and submit it"""
        now = now or current_time()
        window, areas, user = await asyncio.gather(
            self.client.fetch_booking_window(),
            self.client.fetch_areas(),
            self.client.fetch_user(self.session.user_id)
        )

        # Contact fields fall back to the profile; the owner is always the caller
        form = form.model_copy(update={
            "first_name": form.first_name or user.first_name,
            "last_name": form.last_name or user.last_name,
            "email": form.email or user.email,
            "phone": form.phone or user.phone_number,
            "destination": form.destination or user.university or settings.DEFAULT_DESTINATION,
            "area": form.area or user.area,
            "user_id": self.session.user_id,
        })

        point = AreaService.find_place(
            AreaService.places_in_area(areas, form.area), form.start_point
        )
        trip_type = TripType.parse(form.trip_type)
        seat_cap = None
        if trip_type is not None:
            snapshot = await self.seat_snapshot(window, parse_start_date(form.date))
            seat_cap = seats_for_snapshot(trip_type, snapshot)

        validator = BookingFormValidator(
            window,
            available_days=self.available_days(window, now),
            seat_cap=seat_cap
        )
        return await validator.submit(form, self.client, selected_point=point, published_at=now)

    async def list_trips(self) -> TripsOverview:
        """Caller's bookings split into upcoming and past"""
        user = await self.client.fetch_user(self.session.user_id)
        upcoming = [b for b in user.bookings if not b.is_finished]
        past = [b for b in user.bookings if b.is_finished]

        upcoming.sort(key=lambda b: b.date or date.max)
        past.sort(key=lambda b: b.date or date.min, reverse=True)
        return TripsOverview(upcoming=upcoming, past=past)

    async def cancel_booking(self, booking_id: str) -> BookingRecord:
        """Cancel one of the caller's own bookings"""
        user = await self.client.fetch_user(self.session.user_id)
        booking = next((b for b in user.bookings if b.id == booking_id), None)
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        if booking.is_finished:
            raise BookingNotCancellableError(
                f"Booking {booking_id} is already {booking.trip_status}"
            )

        trip_status = await self.client.update_booking_status(booking_id, TripStatus.CANCELLED)
        logger.info("Booking %s cancelled by user %s", booking_id, self.session.user_id)
        return booking.model_copy(update={"trip_status": trip_status})
