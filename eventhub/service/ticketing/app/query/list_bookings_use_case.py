from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, BookingScope, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class ListBookingsUseCase:
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
    async def list_bookings(self, *, principal: Principal) -> List[dict]:
        """user → own bookings, organizer → bookings on events they organize, admin → all"""
        AccessPolicy.authorize(principal, Operation.LIST_BOOKINGS)

        scope = AccessPolicy.booking_scope(principal)
        if scope == BookingScope.OWN:
            bookings = await self.booking_query_repo.list_with_details(user_id=principal.id)
        elif scope == BookingScope.ORGANIZED:
            bookings = await self.booking_query_repo.list_with_details(organizer_id=principal.id)
        else:
            bookings = await self.booking_query_repo.list_with_details()

        Logger.base.info(
            f'📋 [LIST-BOOKINGS] {len(bookings)} booking(s) for {principal.role} '
            f'{principal.id} (scope={scope})'
        )
        return bookings
