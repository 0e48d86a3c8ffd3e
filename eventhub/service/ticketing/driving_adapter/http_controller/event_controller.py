from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from eventhub.platform.config.core_setting import settings
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from eventhub.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from eventhub.service.ticketing.app.command.update_event_use_case import UpdateEventUseCase
from eventhub.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from eventhub.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from eventhub.service.ticketing.domain.access_policy import Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.role_auth import require
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    MessageResponse,
)
from eventhub.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    PublicEventListResponse,
)


router = APIRouter()


# Static paths are registered before /{event_id}


@router.get('/public', response_model=PublicEventListResponse)
@Logger.io
async def list_public_events(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.PUBLIC_EVENTS_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> PublicEventListResponse:
    result = await use_case.list_public(category=category, search=search, page=page, limit=limit)
    return PublicEventListResponse.model_validate(result)


@router.get('', response_model=List[EventResponse])
@Logger.io
async def list_managed_events(
    principal: Principal = Depends(require(Operation.MANAGE_EVENTS)),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_managed(principal=principal)
    return [EventResponse.model_validate(event) for event in events]


@router.post('', response_model=EventResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    principal: Principal = Depends(require(Operation.MANAGE_EVENTS)),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        principal=principal,
        title=request.title,
        description=request.description,
        date=request.date,
        time=request.time,
        location=request.location,
        price=request.price,
        available_tickets=request.available_tickets,
        category=request.category,
        status=request.status,
        image=request.image,
    )
    return EventResponse.model_validate(event)


@router.get('/{event_id}', response_model=EventResponse)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_id(event_id=event_id)
    return EventResponse.model_validate(event)


@router.put('/{event_id}', response_model=EventResponse)
@Logger.io
async def update_event(
    event_id: int,
    request: EventUpdateRequest,
    principal: Principal = Depends(require(Operation.MANAGE_EVENTS)),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        principal=principal,
        event_id=event_id,
        changes=request.model_dump(exclude_unset=True),
    )
    return EventResponse.model_validate(event)


@router.delete('/{event_id}', response_model=MessageResponse)
@Logger.io
async def delete_event(
    event_id: int,
    principal: Principal = Depends(require(Operation.MANAGE_EVENTS)),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> MessageResponse:
    await use_case.delete_event(principal=principal, event_id=event_id)
    return MessageResponse(message='Event deleted successfully')
