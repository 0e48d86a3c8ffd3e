import time
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from eventhub.platform.config.core_setting import settings
from eventhub.platform.config.di import Container
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork, is_transient_db_error
from eventhub.platform.exception.exceptions import (
    CustomBaseError,
    InsufficientInventoryError,
    InternalError,
    InvalidStateError,
    NotFoundError,
)
from eventhub.platform.logging.loguru_io import Logger
from eventhub.platform.metrics.booking_metrics import metrics
from eventhub.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from eventhub.service.ticketing.app.interface.i_domain_event_publisher import (
    IDomainEventPublisher,
)
from eventhub.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingConfirmedEvent,
)
from eventhub.service.ticketing.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Create booking - reserve tickets and write the ledger entry in one transaction

    Flow:
    1. Conditional decrement of the event's available_tickets
       (only matches an upcoming event with enough tickets left)
    2. Nothing matched → re-read the event in the same transaction to report why
    3. Insert the confirmed booking, commit
    4. Publish BookingConfirmedEvent (notification is best-effort)
    5. Return the booking joined with event/user display fields

    Transient store conflicts restart the whole transaction, up to
    BOOKING_MAX_RETRIES times.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        booking_query_repo: IBookingQueryRepo,
        event_publisher: IDomainEventPublisher,
    ) -> None:
        self.uow = uow
        self.booking_query_repo = booking_query_repo
        self.event_publisher = event_publisher
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_publisher: IDomainEventPublisher = Depends(Provide[Container.domain_event_bus]),
    ) -> Self:
        return cls(uow=uow, booking_query_repo=booking_query_repo, event_publisher=event_publisher)

    @Logger.io
    async def create_booking(self, *, user_id: int, event_id: int, tickets_booked: int) -> dict:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'event.id': event_id,
                'booking.tickets': tickets_booked,
            },
        ):
            Booking.validate_tickets_requested(tickets_booked)

            start = time.perf_counter()
            result = 'success'
            try:
                booking, event_title = await self._reserve_with_retry(
                    user_id=user_id, event_id=event_id, tickets_booked=tickets_booked
                )
            except CustomBaseError as e:
                result = metrics.result_label(e)
                raise
            except Exception:
                result = 'error'
                raise
            finally:
                metrics.record_operation(
                    operation='create', result=result, duration=time.perf_counter() - start
                )

            metrics.record_tickets_sold(quantity=booking.tickets_booked)
            Logger.base.info(
                f'🎫 [CREATE-BOOKING] {booking.id} confirmed: user {user_id} took '
                f'{tickets_booked} ticket(s) of event {event_id}'
            )

            await self.event_publisher.publish(
                event=BookingConfirmedEvent.from_booking(booking=booking, event_title=event_title)
            )

            details = await self.booking_query_repo.get_by_id_with_details(booking_id=booking.id)
            if details is None:
                raise InternalError(f'Booking {booking.id} vanished after commit')
            return details

    async def _reserve_with_retry(
        self, *, user_id: int, event_id: int, tickets_booked: int
    ) -> tuple[Booking, str]:
        max_retries = settings.BOOKING_MAX_RETRIES
        for attempt in range(max_retries + 1):
            try:
                return await self._reserve_once(
                    user_id=user_id, event_id=event_id, tickets_booked=tickets_booked
                )
            except CustomBaseError:
                raise
            except Exception as e:
                if not is_transient_db_error(e):
                    raise
                if attempt >= max_retries:
                    raise InternalError(
                        f'create_booking gave up after {attempt + 1} attempts: {e}'
                    ) from e
                metrics.record_retry(operation='create')
                delay = settings.BOOKING_RETRY_BASE_DELAY * (2**attempt)
                Logger.base.warning(
                    f'🔁 [CREATE-BOOKING] Transient store error on attempt {attempt + 1}, '
                    f'retrying in {delay:.3f}s: {e}'
                )
                await anyio.sleep(delay)

        raise InternalError('create_booking retry loop exited without a result')

    async def _reserve_once(
        self, *, user_id: int, event_id: int, tickets_booked: int
    ) -> tuple[Booking, str]:
        async with self.uow:
            event = await self.uow.event_command_repo.reserve_tickets(
                event_id=event_id, quantity=tickets_booked
            )
            if event is None:
                current = await self.uow.event_command_repo.get_by_id(event_id=event_id)
                if current is None:
                    raise NotFoundError('Event not found')
                if not current.is_bookable:
                    raise InvalidStateError('Event is not available for booking')
                raise InsufficientInventoryError()

            booking = Booking.create(
                user_id=user_id,
                event_id=event_id,
                tickets_booked=tickets_booked,
                unit_price=event.price,
            )
            await self.uow.booking_command_repo.create(booking=booking)
            await self.uow.commit()

        return booking, event.title

