import pytest
from datetime import date, datetime
from decimal import Decimal

from zein_bus.areas.schemas import Area, College, University
from zein_bus.auth.schemas import UserProfile
from zein_bus.auth.session import UserSession
from zein_bus.bookings.schemas import (
    BookingCreated, BookingRecord, BookingWindowConfig, PricePoint
)

# Sunday 18 October 2026, mid-morning
NOW = datetime(2026, 10, 18, 10, 0)

class FakeBackendClient:
    """In-memory stand-in for BackendClient"""

    def __init__(self, window, areas, user, universities=None, bookings=None, create_error=None):
        self.window = window
        self.areas = areas
        self.user = user
        self.universities = universities or []
        self.bookings = bookings or []
        self.create_error = create_error
        self.submissions = []
        self.status_updates = []

    async def fetch_booking_window(self):
        return self.window

    async def fetch_areas(self):
        return self.areas

    async def fetch_user(self, user_id):
        return self.user

    async def fetch_universities(self):
        return self.universities

    async def fetch_bookings_on(self, on_date):
        return [b for b in self.bookings if b.date == on_date]

    async def create_booking(self, submission):
        if self.create_error:
            raise self.create_error
        self.submissions.append(submission)
        return BookingCreated(id="101", date=submission.date, published_at=submission.published_at)

    async def update_booking_status(self, booking_id, trip_status):
        self.status_updates.append((booking_id, trip_status))
        return trip_status.value

@pytest.fixture
def now():
    return NOW

@pytest.fixture
def window():
    return BookingWindowConfig(
        booking_status=True,
        booking_start_date="2026-10-18",
        booking_days_count=6,
        cancel_friday_booking=True,
        end_of_day_time="20:00",
        available_bookings_count=10,
        departure_time=[
            {"label": "3:00 PM", "value": "15:00"},
            {"label": "5:00 PM", "value": "17:00"},
        ],
        notes="Buses leave from gate 2"
    )

@pytest.fixture
def metro_station():
    return PricePoint(
        name="محطة المترو",
        one_way_price=Decimal("60"),
        return_price=None,
        round_trip_price=Decimal("100")
    )

@pytest.fixture
def areas(metro_station):
    return [
        Area(id="1", name="المعادي", places=[
            metro_station,
            PricePoint(name="كارفور", one_way_price=Decimal("55"), return_price=Decimal("55"))
        ]),
        Area(id="2", name="حلوان", places=[PricePoint(name="الجامعة")]),
    ]

@pytest.fixture
def bookings():
    return [
        BookingRecord(id="1", date=date(2026, 10, 20), trip_type="ذهاب", seats=2, trip_status="pending"),
        BookingRecord(id="2", date=date(2026, 10, 19), trip_type="ذهاب وعودة", seats=1, trip_status="confirmed"),
        BookingRecord(id="3", date=date(2026, 10, 1), trip_type="عودة", seats=1, trip_status="completed"),
        BookingRecord(id="4", date=date(2026, 10, 5), trip_type="ذهاب", seats=3, trip_status="cancelled"),
    ]

@pytest.fixture
def user(bookings):
    return UserProfile(
        id="7",
        username="omar",
        first_name="Omar",
        last_name="Hassan",
        email="omar@example.com",
        phone_number="01000000000",
        area="المعادي",
        start_point="محطة المترو",
        university=None,
        faculty="Engineering",
        bookings=bookings
    )

@pytest.fixture
def universities():
    return [University(id="1", name="جامعة الجلالة", colleges=[College(id="1", name="Engineering")])]

@pytest.fixture
def session():
    return UserSession(token="token-abc", user_id="7")

@pytest.fixture
def fake_client(window, areas, user, universities, bookings):
    return FakeBackendClient(window, areas, user, universities=universities, bookings=bookings)

@pytest.fixture
def make_client(areas, user, universities, bookings):
    """Fake client with a custom booking window or create error"""
    def _make(window, create_error=None):
        return FakeBackendClient(
            window, areas, user,
            universities=universities, bookings=bookings, create_error=create_error
        )
    return _make
