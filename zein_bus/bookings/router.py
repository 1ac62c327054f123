from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List

from zein_bus.auth.dependencies import (
    get_current_session, get_public_client, get_session_client
)
from zein_bus.auth.session import UserSession
from zein_bus.backend.client import BackendClient
from zein_bus.bookings.booking_service import (
    BookingNotCancellableError, BookingNotFoundError, BookingService
)
from zein_bus.bookings.draft import BookingContext
from zein_bus.bookings.fare_service import calculate_trip_cost
from zein_bus.bookings.schemas import (
    BookingCreated, BookingFormData, BookingQuote, BookingQuoteRequest,
    BookingRecord, SelectableDate, TripsOverview
)
from zein_bus.bookings.seat_service import calculate_available_seats

router = APIRouter()

def get_booking_service(
    client: BackendClient = Depends(get_session_client),
    session: UserSession = Depends(get_current_session)
) -> BookingService:
    return BookingService(client, session)

@router.get("/available-days", response_model=List[SelectableDate])
async def get_available_days(client: BackendClient = Depends(get_public_client)):
    """Days currently open for booking"""
    window = await client.fetch_booking_window()
    return BookingService.available_days(window)

@router.get("/context", response_model=BookingContext)
async def get_booking_context(service: BookingService = Depends(get_booking_service)):
    """Booking page state with a draft prefilled from the profile"""
    return await service.get_context()

@router.post("/quote", response_model=BookingQuote)
async def quote_booking(
    request: BookingQuoteRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Price and seat cap for a trip type, seat count and pickup point"""
    return await service.quote(request)

@router.get("/cost")
def get_trip_cost(
    trip_type: str = Query(..., description="Trip type"),
    seats: str = Query("", description="Number of seats"),
):
    """Cost at default fares, without a pickup point"""
    return {"trip_type": trip_type, "seats": seats, "trip_cost": calculate_trip_cost(trip_type, seats, None)}

@router.get("/seats")
def get_seat_cap(
    trip_type: str = Query(..., description="Trip type"),
    total_available: int = Query(..., ge=0, description="Seats available in the window"),
    outbound_booked: int = Query(0, ge=0, description="Seats booked on the outbound leg"),
    return_booked: int = Query(0, ge=0, description="Seats booked on the return leg"),
):
    """Seat cap offered for a new booking"""
    seat_cap = calculate_available_seats(trip_type, total_available, outbound_booked, return_booked)
    return {"trip_type": trip_type, "seat_cap": seat_cap}

@router.post("/", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    form: BookingFormData,
    service: BookingService = Depends(get_booking_service)
):
    """Validate the booking form and submit it to the backend"""
    result = await service.create_booking(form)

    if result.error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Booking validation failed",
                "errors": [
                    {
                        "code": result.error.error_code.value,
                        "message": result.error.error_message,
                        "field": result.error.field,
                        "details": result.error.details
                    }
                ]
            }
        )

    if not result.accepted:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.backend_error
        )

    return result.booking

@router.get("/mine", response_model=TripsOverview)
async def get_my_trips(service: BookingService = Depends(get_booking_service)):
    """Caller's upcoming and past trips"""
    return await service.list_trips()

@router.post("/{booking_id}/cancel", response_model=BookingRecord)
async def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service)
):
    """Cancel one of the caller's bookings"""
    try:
        return await service.cancel_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BookingNotCancellableError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
