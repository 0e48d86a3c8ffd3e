from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from eventhub.platform.config.di import Container
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_dashboard_query_repo import IDashboardQueryRepo
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal


class DashboardUseCase:
    def __init__(self, dashboard_query_repo: IDashboardQueryRepo) -> None:
        self.dashboard_query_repo = dashboard_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        dashboard_query_repo: IDashboardQueryRepo = Depends(
            Provide[Container.dashboard_query_repo]
        ),
    ) -> Self:
        return cls(dashboard_query_repo=dashboard_query_repo)

    @Logger.io
    async def admin_summary(self, *, principal: Principal) -> dict:
        AccessPolicy.authorize(principal, Operation.VIEW_ADMIN_DASHBOARD)
        return await self.dashboard_query_repo.get_admin_summary()

    @Logger.io
    async def organizer_summary(self, *, principal: Principal) -> dict:
        AccessPolicy.authorize(principal, Operation.VIEW_ORGANIZER_DASHBOARD)
        return await self.dashboard_query_repo.get_organizer_summary(organizer_id=principal.id)

    @Logger.io
    async def user_summary(self, *, principal: Principal) -> dict:
        AccessPolicy.authorize(principal, Operation.VIEW_USER_DASHBOARD)
        return await self.dashboard_query_repo.get_user_summary(user_id=principal.id)
