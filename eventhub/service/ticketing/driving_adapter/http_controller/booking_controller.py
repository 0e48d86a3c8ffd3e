from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from eventhub.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from eventhub.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from eventhub.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from eventhub.service.ticketing.domain.access_policy import Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.role_auth import require
from eventhub.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    principal: Principal = Depends(require(Operation.CREATE_BOOKING)),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('user_id', principal.id)

        booking = await use_case.create_booking(
            user_id=principal.id,
            event_id=request.event_id,
            tickets_booked=request.tickets_booked,
        )

        span.set_attribute('booking.id', str(booking['id']))
        return BookingResponse.model_validate(booking)


@router.get('', response_model=List[BookingResponse])
@Logger.io
async def list_bookings(
    principal: Principal = Depends(require(Operation.LIST_BOOKINGS)),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_bookings(principal=principal)
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.get('/{booking_id}', response_model=BookingResponse)
@Logger.io
async def get_booking(
    booking_id: UUID,
    principal: Principal = Depends(require(Operation.VIEW_BOOKING)),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking_with_details(principal=principal, booking_id=booking_id)
    return BookingResponse.model_validate(booking)


@router.put('/{booking_id}/cancel', response_model=BookingResponse)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    principal: Principal = Depends(require(Operation.CANCEL_BOOKING)),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.cancel_booking(principal=principal, booking_id=booking_id)
    return BookingResponse.model_validate(booking)
