from fastapi import APIRouter, Depends

from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.query.dashboard_use_case import DashboardUseCase
from eventhub.service.ticketing.domain.access_policy import Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.role_auth import require
from eventhub.service.ticketing.driving_adapter.http_controller.schema.dashboard_schema import (
    AdminDashboardResponse,
    OrganizerDashboardResponse,
    UserDashboardResponse,
)


router = APIRouter()


@router.get('/summary', response_model=AdminDashboardResponse)
@Logger.io
async def admin_dashboard(
    principal: Principal = Depends(require(Operation.VIEW_ADMIN_DASHBOARD)),
    use_case: DashboardUseCase = Depends(DashboardUseCase.depends),
) -> AdminDashboardResponse:
    return AdminDashboardResponse.model_validate(await use_case.admin_summary(principal=principal))


@router.get('/organizer', response_model=OrganizerDashboardResponse)
@Logger.io
async def organizer_dashboard(
    principal: Principal = Depends(require(Operation.VIEW_ORGANIZER_DASHBOARD)),
    use_case: DashboardUseCase = Depends(DashboardUseCase.depends),
) -> OrganizerDashboardResponse:
    summary = await use_case.organizer_summary(principal=principal)
    return OrganizerDashboardResponse.model_validate(summary)


@router.get('/user', response_model=UserDashboardResponse)
@Logger.io
async def user_dashboard(
    principal: Principal = Depends(require(Operation.VIEW_USER_DASHBOARD)),
    use_case: DashboardUseCase = Depends(DashboardUseCase.depends),
) -> UserDashboardResponse:
    return UserDashboardResponse.model_validate(await use_case.user_summary(principal=principal))
