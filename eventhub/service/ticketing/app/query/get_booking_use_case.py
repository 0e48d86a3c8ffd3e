from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.exception.exceptions import ForbiddenError, NotFoundError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class GetBookingUseCase:
    def __init__(self, booking_query_repo: IBookingQueryRepo):
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def get_booking_with_details(self, *, principal: Principal, booking_id: UUID) -> dict:
        """Visible to the booker, the organizer of the booked event, and admins"""
        AccessPolicy.authorize(principal, Operation.VIEW_BOOKING)

        booking_details = await self.booking_query_repo.get_by_id_with_details(
            booking_id=booking_id
        )
        if not booking_details:
            raise NotFoundError('Booking not found')

        event = booking_details['event']
        if not AccessPolicy.can_view_booking(
            principal,
            owner_id=booking_details['user_id'],
            organizer_id=event['organizer_id'] if event else None,
        ):
            raise ForbiddenError('Access denied')

        return booking_details
