import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from zein_bus.backend.errors import BackendError
from zein_bus.bookings.calendar_service import generate_available_days
from zein_bus.bookings.schemas import (
    BookingErrorCode, BookingFormData, BookingWindowConfig, DepartureTimeOptions,
    SingleDepartureTime, TripType, parse_departure_time, resolve_departure_time
)
from zein_bus.bookings.validation import BookingFormValidator

PUBLISHED_AT = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)

def make_form(**overrides):
    fields = dict(
        first_name="Omar",
        last_name="Hassan",
        email="omar@example.com",
        phone="01000000000",
        destination="جامعة الجلالة",
        area="المعادي",
        date="2026-10-20",
        trip_type="ذهاب وعودة",
        start_point="محطة المترو",
        end_time="17:00",
        seats="2",
        payment_type="cash",
        user_id="7",
    )
    fields.update(overrides)
    return BookingFormData(**fields)

def error_code(validator, **overrides):
    error = validator.validate(make_form(**overrides))
    return error.error_code if error else None

@pytest.fixture
def validator(window):
    return BookingFormValidator(window)

def test_complete_form_passes(validator):
    assert validator.validate(make_form()) is None

def test_closed_window_is_reported_first(window):
    closed = window.model_copy(update={"booking_status": False})
    validator = BookingFormValidator(closed)

    assert error_code(validator, trip_type="", seats="") == BookingErrorCode.CONFIG_UNAVAILABLE

def test_trip_type_required(validator):
    assert error_code(validator, trip_type="") == BookingErrorCode.MISSING_TRIP_TYPE
    assert error_code(validator, trip_type="express") == BookingErrorCode.MISSING_TRIP_TYPE

def test_outbound_needs_start_point(validator):
    assert error_code(validator, trip_type="ذهاب", start_point=None) == BookingErrorCode.MISSING_START_POINT

def test_round_trip_needs_start_point(validator):
    assert error_code(validator, trip_type="ذهاب وعودة", start_point="") == BookingErrorCode.MISSING_START_POINT

def test_return_does_not_need_start_point(validator):
    assert validator.validate(make_form(trip_type="عودة", start_point=None)) is None

def test_seats_must_be_positive_integer(validator):
    assert error_code(validator, seats="") == BookingErrorCode.INVALID_SEAT_COUNT
    assert error_code(validator, seats="0") == BookingErrorCode.INVALID_SEAT_COUNT
    assert error_code(validator, seats="two") == BookingErrorCode.INVALID_SEAT_COUNT

def test_seats_limited_to_four(validator):
    assert error_code(validator, seats="5") == BookingErrorCode.SEAT_COUNT_EXCEEDS_PER_BOOKING_LIMIT

def test_seats_limited_by_availability(window):
    validator = BookingFormValidator(window.model_copy(update={"available_bookings_count": 1}))

    error = validator.validate(make_form(seats="2"))

    assert error.error_code == BookingErrorCode.SEAT_COUNT_EXCEEDS_AVAILABILITY
    assert "1" in error.error_message
    assert error.field == "seats"

def test_date_required(validator):
    assert error_code(validator, date=None) == BookingErrorCode.MISSING_DATE
    assert error_code(validator, date="someday") == BookingErrorCode.MISSING_DATE

def test_date_must_be_open_when_days_are_known(window, now):
    days = generate_available_days(
        window.start_date, window.days_count, window.cancel_friday, window.end_of_day_cutoff, now=now
    )
    validator = BookingFormValidator(window, available_days=days)

    assert error_code(validator, date="2026-10-20") is None
    # Friday is closed in this window
    assert error_code(validator, date="2026-10-23") == BookingErrorCode.MISSING_DATE

def test_return_time_required_for_return_legs(validator):
    assert error_code(validator, trip_type="عودة", end_time="") == BookingErrorCode.MISSING_RETURN_TIME
    assert error_code(validator, trip_type="ذهاب وعودة", end_time=None) == BookingErrorCode.MISSING_RETURN_TIME
    assert error_code(validator, trip_type="ذهاب", end_time=None) is None

def test_only_first_failure_is_reported(validator):
    error = validator.validate(make_form(start_point=None, seats="9", date=None))

    assert error.error_code == BookingErrorCode.MISSING_START_POINT

def test_submission_recomputes_cost(validator, metro_station):
    submission = validator.build_submission(make_form(seats="3"), metro_station, PUBLISHED_AT)

    assert submission.trip_cost == Decimal("300")
    assert submission.seats == 3
    assert submission.trip_type is TripType.ROUND_TRIP
    assert submission.date == date(2026, 10, 20)
    assert submission.start_time == "15:00"
    assert submission.end_time == "17:00"
    assert submission.published_at == PUBLISHED_AT

def test_outbound_submission_defaults_end_time(validator):
    submission = validator.build_submission(make_form(trip_type="ذهاب", end_time=None), None, PUBLISHED_AT)

    assert submission.end_time == "09:00"
    assert submission.trip_cost == Decimal("100")

def test_return_submission_without_start_point(validator):
    submission = validator.build_submission(make_form(trip_type="عودة", start_point=None), None, PUBLISHED_AT)

    assert submission.start_point == ""

def test_submission_variables(validator):
    variables = validator.build_submission(make_form(), None, PUBLISHED_AT).to_variables()

    assert variables["tripType"] == "ذهاب وعودة"
    assert variables["tripCost"] == 180.0
    assert variables["seats"] == 2
    assert variables["date"] == "2026-10-20"
    assert variables["userId"] == "7"
    assert variables["publishedAt"] == "2026-10-18T08:00:00+00:00"

def test_departure_time_variants():
    assert resolve_departure_time(parse_departure_time("07:30")) == "07:30"
    assert resolve_departure_time(parse_departure_time("07:30:00.000")) == "07:30"
    assert resolve_departure_time(parse_departure_time([{"label": "a", "value": "16:00"}])) == "16:00"
    assert resolve_departure_time(parse_departure_time(["18:15"])) == "18:15"
    assert resolve_departure_time(parse_departure_time([])) == "09:00"
    assert resolve_departure_time(parse_departure_time("soon")) == "09:00"
    assert resolve_departure_time(parse_departure_time(None)) == "09:00"

def test_departure_time_is_tagged():
    assert isinstance(parse_departure_time("07:30"), SingleDepartureTime)
    assert isinstance(parse_departure_time([{"label": "a", "value": "16:00"}]), DepartureTimeOptions)

    window = BookingWindowConfig(departure_time="07:30")
    assert window.departure_time.kind == "single"
    assert [o.value for o in window.return_time_options()] == ["07:30"]

async def test_submit_relays_success(validator, fake_client):
    result = await validator.submit(make_form(), fake_client, published_at=PUBLISHED_AT)

    assert result.accepted
    assert result.booking.id == "101"
    assert fake_client.submissions == [result.submission]

async def test_submit_does_not_call_backend_for_invalid_form(validator, fake_client):
    result = await validator.submit(make_form(trip_type=""), fake_client)

    assert not result.accepted
    assert result.error.error_code == BookingErrorCode.MISSING_TRIP_TYPE
    assert fake_client.submissions == []

async def test_submit_relays_backend_error_verbatim(window, make_client):
    client = make_client(window, create_error=BackendError("Forbidden access", status_code=403))

    result = await BookingFormValidator(window).submit(make_form(), client)

    assert not result.accepted
    assert result.error is None
    assert result.backend_error == "Forbidden access"

def test_seat_cap_for_the_day_limits_seats(window):
    validator = BookingFormValidator(window, seat_cap=1)

    error = validator.validate(make_form(seats="2"))

    assert error.error_code == BookingErrorCode.SEAT_COUNT_EXCEEDS_AVAILABILITY
    assert "1" in error.error_message
    assert validator.validate(make_form(seats="1")) is None

def test_submission_within_day_cap(window):
    submission = BookingFormValidator(window, seat_cap=2).build_submission(make_form(seats="2"), None, PUBLISHED_AT)

    assert submission.seats == 2
