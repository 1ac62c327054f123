import logging
from typing import Optional, Sequence
from datetime import date, datetime, timezone

from zein_bus.backend.errors import BackendError
from zein_bus.bookings.draft import BookingDraft
from zein_bus.bookings.fare_service import parse_seat_count
from zein_bus.bookings.seat_service import MAX_SEATS_PER_BOOKING
from zein_bus.bookings.schemas import (
    BookingErrorCode, BookingFormData, BookingSubmission, BookingSubmissionResult,
    BookingValidationError, BookingWindowConfig, DEFAULT_TIME, PricePoint,
    SelectableDate, TripType, resolve_departure_time
)

logger = logging.getLogger(__name__)

class BookingFormValidator:
    """Gate between the booking form and the backend createBooking mutation.

    Rules run in a fixed order and the first failure is reported alone.
    When seat_cap is given (the calculator's value for the chosen day and
    trip type) it tightens the availability rule.
    """

    def __init__(
        self,
        window: BookingWindowConfig,
        available_days: Optional[Sequence[SelectableDate]] = None,
        seat_cap: Optional[int] = None
    ):
        self.window = window
        self.available_days = available_days
        self.seat_cap = seat_cap

    @staticmethod
    def _error(
        code: BookingErrorCode,
        message: str,
        field: Optional[str] = None,
        details: Optional[str] = None
    ) -> BookingValidationError:
        return BookingValidationError(
            error_code=code, error_message=message, field=field, details=details
        )

    def _parse_date(self, value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            selected = date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
        if self.available_days is not None:
            if selected.isoformat() not in {d.value for d in self.available_days}:
                return None
        return selected

    def validate(self, form: BookingFormData) -> Optional[BookingValidationError]:
        """Return the first rule the form breaks, or None when it can be submitted"""

        if not self.window.booking_status:
            return self._error(
                BookingErrorCode.CONFIG_UNAVAILABLE,
                "الحجز غير متاح حالياً",
                details="يرجى المحاولة في وقت لاحق"
            )

        trip_type = TripType.parse(form.trip_type)
        if trip_type is None:
            return self._error(
                BookingErrorCode.MISSING_TRIP_TYPE,
                "يرجى اختيار نوع الرحلة",
                field="trip_type"
            )

        # Return trips leave from the university, so no pickup point is asked for
        if trip_type.needs_start_point and not form.start_point:
            return self._error(
                BookingErrorCode.MISSING_START_POINT,
                "يرجى اختيار نقطة التحرك",
                field="start_point"
            )

        seats = parse_seat_count(form.seats)
        if seats <= 0:
            return self._error(
                BookingErrorCode.INVALID_SEAT_COUNT,
                "يرجى اختيار عدد المقاعد",
                field="seats"
            )

        if seats > MAX_SEATS_PER_BOOKING:
            return self._error(
                BookingErrorCode.SEAT_COUNT_EXCEEDS_PER_BOOKING_LIMIT,
                "تجاوزت الحد الأقصى للمقاعد",
                field="seats",
                details=f"يمكنك حجز {MAX_SEATS_PER_BOOKING} مقاعد كحد أقصى"
            )

        remaining = self.window.available_bookings_count
        if self.seat_cap is not None:
            remaining = min(remaining, self.seat_cap)
        if seats > remaining:
            return self._error(
                BookingErrorCode.SEAT_COUNT_EXCEEDS_AVAILABILITY,
                f"عدد المقاعد المتاحة غير كافي (المتاح حالياً: {remaining})",
                field="seats",
                details=f"عدد المقاعد المتاحة حالياً: {remaining}"
            )

        if self._parse_date(form.date) is None:
            return self._error(
                BookingErrorCode.MISSING_DATE,
                "يرجى اختيار تاريخ الرحلة",
                field="date"
            )

        if trip_type.needs_return_time and not form.end_time:
            return self._error(
                BookingErrorCode.MISSING_RETURN_TIME,
                "يرجى اختيار وقت العودة",
                field="end_time"
            )

        return None

    def build_draft(
        self,
        form: BookingFormData,
        selected_point: Optional[PricePoint] = None
    ) -> BookingDraft:
        """Typed draft from a form that already passed validate()"""
        return BookingDraft(
            first_name=form.first_name or "",
            last_name=form.last_name or "",
            email=form.email or "",
            phone=form.phone or "",
            destination=form.destination or "",
            area=form.area or "",
            user_id=form.user_id or "",
            trip_type=TripType.parse(form.trip_type),
            date=self._parse_date(form.date),
            start_point=selected_point,
            seats=parse_seat_count(form.seats),
            seat_cap=MAX_SEATS_PER_BOOKING if self.seat_cap is None else max(self.seat_cap, 0),
            end_time=form.end_time or None,
            payment_type=form.payment_type
        )

    def build_submission(
        self,
        form: BookingFormData,
        selected_point: Optional[PricePoint] = None,
        published_at: Optional[datetime] = None
    ) -> BookingSubmission:
        """Final createBooking payload; the cost always comes from the fare table"""
        draft = self.build_draft(form, selected_point)
        return BookingSubmission(
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
            phone=draft.phone,
            destination=draft.destination,
            date=draft.date,
            trip_type=draft.trip_type,
            trip_cost=draft.computed_cost,
            area=draft.area,
            start_point=form.start_point or "",
            start_time=resolve_departure_time(self.window.departure_time),
            end_time=draft.end_time or DEFAULT_TIME,
            seats=draft.seats,
            payment_type=draft.payment_type,
            user_id=draft.user_id,
            published_at=published_at or datetime.now(timezone.utc)
        )

    async def submit(
        self,
        form: BookingFormData,
        gateway,
        selected_point: Optional[PricePoint] = None,
        published_at: Optional[datetime] = None
    ) -> BookingSubmissionResult:
        """Validate, then hand the payload to gateway.create_booking().

        Backend failures come back in the result with the backend's message;
        nothing is retried.
        """
        error = self.validate(form)
        if error:
            logger.info("Booking rejected: %s", error.error_code.value)
            return BookingSubmissionResult(accepted=False, error=error)

        submission = self.build_submission(form, selected_point, published_at)
        try:
            booking = await gateway.create_booking(submission)
        except BackendError as e:
            logger.warning("Backend refused booking: %s", e.message)
            return BookingSubmissionResult(
                accepted=False, backend_error=e.message, submission=submission
            )

        logger.info("Booking %s created for %s", booking.id, submission.date)
        return BookingSubmissionResult(accepted=True, booking=booking, submission=submission)
