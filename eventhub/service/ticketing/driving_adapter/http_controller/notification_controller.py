from fastapi import APIRouter, Depends, Query

from eventhub.platform.config.core_setting import settings
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.command.mark_notification_read_use_case import (
    MarkNotificationReadUseCase,
)
from eventhub.service.ticketing.app.query.list_notifications_use_case import (
    ListNotificationsUseCase,
)
from eventhub.service.ticketing.domain.access_policy import Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.role_auth import require
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    MessageResponse,
)
from eventhub.service.ticketing.driving_adapter.http_controller.schema.notification_schema import (
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)


router = APIRouter()


@router.get('', response_model=NotificationListResponse)
@Logger.io
async def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.NOTIFICATIONS_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    principal: Principal = Depends(require(Operation.READ_NOTIFICATIONS)),
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> NotificationListResponse:
    result = await use_case.list_notifications(principal=principal, page=page, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in result['notifications']],
        total_pages=result['total_pages'],
        current_page=result['current_page'],
        total=result['total'],
    )


@router.put('/mark-all-read', response_model=MessageResponse)
@Logger.io
async def mark_all_read(
    principal: Principal = Depends(require(Operation.READ_NOTIFICATIONS)),
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> MessageResponse:
    await use_case.mark_all_read(principal=principal)
    return MessageResponse(message='All notifications marked as read')


@router.get('/unread-count', response_model=UnreadCountResponse)
@Logger.io
async def unread_count(
    principal: Principal = Depends(require(Operation.READ_NOTIFICATIONS)),
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> UnreadCountResponse:
    return UnreadCountResponse(count=await use_case.count_unread(principal=principal))


@router.put('/{notification_id}/read', response_model=NotificationResponse)
@Logger.io
async def mark_read(
    notification_id: int,
    principal: Principal = Depends(require(Operation.READ_NOTIFICATIONS)),
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> NotificationResponse:
    notification = await use_case.mark_read(principal=principal, notification_id=notification_id)
    return NotificationResponse.model_validate(notification)
