import time
from typing import Self
from uuid import UUID

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from eventhub.platform.config.core_setting import settings
from eventhub.platform.config.di import Container
from eventhub.platform.database.unit_of_work import AbstractUnitOfWork, is_transient_db_error
from eventhub.platform.exception.exceptions import (
    AlreadyCancelledError,
    CustomBaseError,
    ForbiddenError,
    InternalError,
    NotFoundError,
)
from eventhub.platform.logging.loguru_io import Logger
from eventhub.platform.metrics.booking_metrics import metrics
from eventhub.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from eventhub.service.ticketing.app.interface.i_domain_event_publisher import (
    IDomainEventPublisher,
)
from eventhub.service.ticketing.domain.access_policy import AccessPolicy
from eventhub.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
)
from eventhub.service.ticketing.domain.entity.booking_entity import Booking
from eventhub.service.ticketing.domain.value_object.principal import Principal


class CancelBookingUseCase:
    """
    Cancel booking - flip the ledger entry and return its tickets in one transaction

    Flow:
    1. Load booking, check the caller may cancel it
    2. Conditional status transition confirmed → cancelled
       (a concurrent cancel of the same booking matches nothing and is rejected)
    3. Increment the event's available_tickets by the booked quantity, commit
    4. Publish BookingCancelledEvent (notification is best-effort)

    An event deleted after the booking was made has no counter left to restore;
    the booking is still cancelled.
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
    async def cancel_booking(self, *, principal: Principal, booking_id: UUID) -> dict:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={
                'user.id': principal.id,
                'user.role': principal.role.value,
                'booking.id': str(booking_id),
            },
        ):
            start = time.perf_counter()
            result = 'success'
            try:
                booking, event_title = await self._cancel_with_retry(
                    principal=principal, booking_id=booking_id
                )
            except CustomBaseError as e:
                result = metrics.result_label(e)
                raise
            except Exception:
                result = 'error'
                raise
            finally:
                metrics.record_operation(
                    operation='cancel', result=result, duration=time.perf_counter() - start
                )

            Logger.base.info(
                f'↩️ [CANCEL-BOOKING] {booking_id} cancelled by user {principal.id}, '
                f'{booking.tickets_booked} ticket(s) back to event {booking.event_id}'
            )

            await self.event_publisher.publish(
                event=BookingCancelledEvent.from_booking(booking=booking, event_title=event_title)
            )

            details = await self.booking_query_repo.get_by_id_with_details(booking_id=booking_id)
            if details is None:
                raise InternalError(f'Booking {booking_id} vanished after commit')
            return details

    async def _cancel_with_retry(
        self, *, principal: Principal, booking_id: UUID
    ) -> tuple[Booking, str]:
        max_retries = settings.BOOKING_MAX_RETRIES
        for attempt in range(max_retries + 1):
            try:
                return await self._cancel_once(principal=principal, booking_id=booking_id)
            except CustomBaseError:
                raise
            except Exception as e:
                if not is_transient_db_error(e):
                    raise
                if attempt >= max_retries:
                    raise InternalError(
                        f'cancel_booking gave up after {attempt + 1} attempts: {e}'
                    ) from e
                metrics.record_retry(operation='cancel')
                delay = settings.BOOKING_RETRY_BASE_DELAY * (2**attempt)
                Logger.base.warning(
                    f'🔁 [CANCEL-BOOKING] Transient store error on attempt {attempt + 1}, '
                    f'retrying in {delay:.3f}s: {e}'
                )
                await anyio.sleep(delay)

        raise InternalError('cancel_booking retry loop exited without a result')

    async def _cancel_once(self, *, principal: Principal, booking_id: UUID) -> tuple[Booking, str]:
        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking not found')
            if not AccessPolicy.can_cancel_booking(principal, owner_id=booking.user_id):
                raise ForbiddenError('Access denied')
            booking.ensure_cancellable()

            cancelled = await self.uow.booking_command_repo.mark_cancelled_if_confirmed(
                booking_id=booking_id
            )
            if cancelled is None:
                # Lost the race against another cancellation of the same booking
                raise AlreadyCancelledError()

            event = await self.uow.event_command_repo.release_tickets(
                event_id=cancelled.event_id, quantity=cancelled.tickets_booked
            )
            if event is None:
                Logger.base.warning(
                    f'⚠️ [CANCEL-BOOKING] Event {cancelled.event_id} is gone or at capacity, '
                    f'booking {booking_id} cancelled without restoring inventory'
                )

            await self.uow.commit()

        if event is not None:
            metrics.record_tickets_released(quantity=cancelled.tickets_booked)
        event_title = event.title if event is not None else f'Event #{cancelled.event_id}'
        return cancelled, event_title
