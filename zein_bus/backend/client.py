import logging
from typing import Any, Dict, List, Optional
from datetime import date

import httpx

from zein_bus.config import settings
from zein_bus.backend import queries
from zein_bus.backend.errors import BackendError
from zein_bus.auth.schemas import AuthResult, RegisterRequest, UserProfile
from zein_bus.areas.schemas import Area, College, University
from zein_bus.bookings.schemas import (
    BookingCreated, BookingRecord, BookingSubmission, BookingWindowConfig,
    PricePoint, TripStatus
)

logger = logging.getLogger(__name__)

def _entity(node: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Flatten a {id, attributes} entity into one dict"""
    if not node:
        return {}
    flat = dict(node.get("attributes") or {})
    if node.get("id") is not None:
        flat["id"] = str(node["id"])
    return flat

def _entities(collection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not collection:
        return []
    return [_entity(node) for node in collection.get("data") or []]

class BackendClient:
    """Thin async client for the booking GraphQL backend.

    The backend owns users, bookings and the booking dashboard; this client
    only moves snapshots in and mutations out.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.token = token
        self.url = url or settings.GRAPHQL_URL
        self.timeout = timeout or settings.BACKEND_TIMEOUT_SECONDS
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL document and return its data section"""
        payload = {"query": query, "variables": variables or {}}

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(self.url, json=payload, headers=self._headers())
            except httpx.HTTPError as e:
                logger.error("Backend unreachable: %s", e)
                raise BackendError(f"Backend unreachable: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            message = errors[0].get("message") or "Unknown backend error"
            code = (errors[0].get("extensions") or {}).get("code")
            status_code = 401 if code in ("FORBIDDEN", "UNAUTHENTICATED") else response.status_code
            logger.warning("GraphQL error: %s", message)
            raise BackendError(message, status_code=status_code)

        if response.is_error:
            raise BackendError(
                f"Backend responded with HTTP {response.status_code}",
                status_code=response.status_code
            )

        return body.get("data") or {}

    # Auth
    async def login(self, identifier: str, password: str) -> AuthResult:
        data = await self.execute(queries.LOGIN, {"identifier": identifier, "password": password})
        return self._auth_result(data["login"])

    async def register(self, request: RegisterRequest) -> AuthResult:
        data = await self.execute(queries.REGISTER, {
            "username": request.username,
            "email": request.email,
            "password": request.password,
            "firstName": request.first_name,
            "lastName": request.last_name,
            "phoneNumber": request.phone_number,
            "area": request.area,
            "startPoint": request.start_point,
            "university": request.university,
            "faculty": request.faculty,
        })
        return self._auth_result(data["register"])

    @staticmethod
    def _auth_result(payload: Dict[str, Any]) -> AuthResult:
        user = payload.get("user") or {}
        return AuthResult(
            jwt=payload["jwt"],
            user_id=str(user.get("id")),
            username=user.get("username"),
            email=user.get("email")
        )

    # Reads
    async def fetch_user(self, user_id: str) -> UserProfile:
        data = await self.execute(queries.GET_USER_BY_ID, {"id": user_id})
        user = _entity((data.get("usersPermissionsUser") or {}).get("data"))
        if not user:
            raise BackendError(f"User {user_id} not found", status_code=404)
        user["bookings"] = [BookingRecord(**b) for b in _entities(user.get("bookings"))]
        return UserProfile(**user)

    async def fetch_booking_window(self) -> BookingWindowConfig:
        """First booking dashboard; a closed window when none is published"""
        data = await self.execute(queries.GET_BOOKING_DASHBOARDS)
        dashboards = _entities(data.get("bookingDashboards"))
        if not dashboards:
            return BookingWindowConfig()
        return BookingWindowConfig(**dashboards[0])

    async def fetch_areas(self) -> List[Area]:
        data = await self.execute(queries.GET_AREAS)
        areas = []
        for area in _entities(data.get("areas")):
            places = [PricePoint.model_validate(p) for p in _entities(area.get("places"))]
            areas.append(Area(id=area["id"], name=area.get("name") or "", places=places))
        return areas

    async def fetch_universities(self) -> List[University]:
        data = await self.execute(queries.GET_UNIVERSITIES)
        universities = []
        for university in _entities(data.get("universities")):
            colleges = [
                College(id=c["id"], name=c.get("faculty_name") or "")
                for c in _entities(university.get("colleges"))
            ]
            universities.append(University(
                id=university["id"],
                name=university.get("university_name") or "",
                colleges=colleges
            ))
        return universities

    async def fetch_bookings_on(self, on_date: date) -> List[BookingRecord]:
        data = await self.execute(queries.GET_BOOKINGS_ON_DATE, {"date": on_date.isoformat()})
        return [BookingRecord(**b) for b in _entities(data.get("bookings"))]

    # Writes
    async def create_booking(self, submission: BookingSubmission) -> BookingCreated:
        data = await self.execute(queries.CREATE_BOOKING, submission.to_variables())
        created = _entity((data.get("createBooking") or {}).get("data"))
        if not created:
            raise BackendError("Booking was not created")
        return BookingCreated(
            id=created["id"],
            date=created.get("date"),
            published_at=created.get("publishedAt")
        )

    async def update_booking_status(self, booking_id: str, trip_status: TripStatus) -> str:
        data = await self.execute(queries.UPDATE_BOOKING_STATUS, {
            "id": booking_id,
            "data": {"trip_status": trip_status.value}
        })
        updated = _entity((data.get("updateBooking") or {}).get("data"))
        return updated.get("trip_status") or trip_status.value
