from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.add_admin_hold_use_case import AddAdminHoldUseCase
from src.service.ticketing.app.command.add_promo_code_use_case import AddPromoCodeUseCase
from src.service.ticketing.app.command.confirm_booking_use_case import ConfirmBookingUseCase
from src.service.ticketing.app.command.create_event_and_tickets_use_case import (
    CreateEventAndTicketsUseCase,
)
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.command.publish_event_use_case import PublishEventUseCase
from src.service.ticketing.app.command.release_reservation_use_case import (
    ReleaseReservationUseCase,
)
from src.service.ticketing.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.ticketing.app.command.update_event_use_case import UpdateEventUseCase
from src.service.ticketing.app.dto.event_list_filter import EventListFilter, EventSortField
from src.service.ticketing.app.query.check_availability_use_case import CheckAvailabilityUseCase
from src.service.ticketing.app.query.get_event_analytics_use_case import (
    GetEventAnalyticsUseCase,
)
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.ticketing.app.query.list_available_promo_codes_use_case import (
    ListAvailablePromoCodesUseCase,
)
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import default_ticket_types
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.ticketing_error import TicketingError, TicketingErrorKind
from src.service.ticketing.domain.value_object.geo_location import (
    DEFAULT_NEAR_RADIUS_KM,
    GeoLocation,
)
from src.service.ticketing.domain.value_object.user_info import UserInfo
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_optional_user,
    require_event_manager,
)
from src.service.ticketing.driving_adapter.schema.booking_schema import (
    BookingResponse,
    ConfirmBookingRequest,
)
from src.service.ticketing.driving_adapter.schema.common_schema import (
    ApiResponse,
    MessageResponse,
    UserInfoRequest,
)
from src.service.ticketing.driving_adapter.schema.event_schema import (
    AdminHoldRequest,
    AdminHoldResponse,
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    EventAnalyticsResponse,
    EventCreatedResponse,
    EventCreateRequest,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
    PromoCodeCreateRequest,
    PromoCodeInventoryResponse,
    PromoCodeResponse,
    ReservationResponse,
    ReserveTicketsRequest,
    SeatMapResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _parse_near(near: Optional[str]) -> tuple[Optional[GeoLocation], float]:
    """`lng,lat[,radiusKm]` -> (point, radius)."""
    if not near:
        return None, DEFAULT_NEAR_RADIUS_KM
    parts = near.split(',')
    try:
        if len(parts) not in (2, 3):
            raise ValueError(near)
        values = [float(part) for part in parts]
        radius = values[2] if len(values) == 3 else DEFAULT_NEAR_RADIUS_KM
        return GeoLocation(longitude=values[0], latitude=values[1]), radius
    except ValueError as e:
        raise TicketingError(
            TicketingErrorKind.VALIDATION, 'near must be "longitude,latitude[,radiusKm]"'
        ) from e


def _caller_user_info(
    requested: UserInfoRequest, principal: Optional[UserEntity]
) -> UserInfo:
    """Fields sent by the caller win; a signed-in caller fills the gaps."""
    if principal is None:
        return requested.to_domain()
    return UserInfo(
        name=requested.name or principal.name,
        email=requested.email or principal.email,
        phone=requested.phone or principal.phone,
        user_id=principal.id,
    )


# ============================ Event CRUD ============================


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: CreateEventAndTicketsUseCase = Depends(CreateEventAndTicketsUseCase.depends),
) -> ApiResponse[EventCreatedResponse]:
    if request.ticket_types is not None:
        ticket_types = [ticket.to_domain() for ticket in request.ticket_types]
    else:
        ticket_types = default_ticket_types(
            paid_ticket_count=request.paid_ticket_count,
            paid_ticket_price=request.paid_ticket_price,
            code_ticket_count=request.code_ticket_count,
            paid_ticket_zone=request.paid_ticket_seat_type,
            code_ticket_zone=request.code_ticket_seat_type,
        )

    result = await use_case.create_event_and_tickets(
        principal=current_user,
        event=request.to_event(),
        seating_config=request.seating_config.to_domain(),
        ticket_types=ticket_types,
    )
    return ApiResponse(
        message='Event created successfully',
        data=EventCreatedResponse.from_domain(result.event_aggregate),
    )


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def list_events(
    search: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    category: Optional[str] = None,
    event_type: Optional[str] = Query(default=None, alias='eventType'),
    mode: Optional[str] = None,
    start_date_from: Optional[datetime] = Query(default=None, alias='startDateFrom'),
    start_date_to: Optional[datetime] = Query(default=None, alias='startDateTo'),
    min_price: Optional[float] = Query(default=None, alias='minPrice', ge=0),
    max_price: Optional[float] = Query(default=None, alias='maxPrice', ge=0),
    near: Optional[str] = Query(default=None, description='longitude,latitude[,radiusKm]'),
    is_published: bool = Query(default=True, alias='isPublished'),
    sort_by: EventSortField = Query(default=EventSortField.START_DATE, alias='sortBy'),
    sort_order: Literal['asc', 'desc'] = Query(default='asc', alias='sortOrder'),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    current_user: Optional[UserEntity] = Depends(get_optional_user),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    created_by = None
    if not is_published:
        # Drafts are only listed to the people who manage them
        if current_user is None or not current_user.can_manage_events:
            raise ForbiddenError('Only admins and organizers can list unpublished events')
        if current_user.role != UserRole.ADMIN:
            created_by = current_user.id

    point, radius_km = _parse_near(near)
    event_filter = EventListFilter(
        search=search,
        city=city,
        state=state,
        country=country,
        category=category,
        event_type=event_type,
        mode=mode,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        min_price=min_price,
        max_price=max_price,
        near=point,
        radius_km=radius_km,
        is_published=is_published,
        created_by=created_by,
        sort_by=sort_by,
        descending=sort_order == 'desc',
        page=page,
        limit=limit,
    )
    events, total = await use_case.list_events(event_filter=event_filter)
    return EventListResponse(
        count=len(events),
        total=total,
        total_pages=event_filter.total_pages(total),
        current_page=page,
        data=[
            EventResponse.from_domain(aggregate, include_promo_codes=False)
            for aggregate in events
        ],
    )


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> ApiResponse[EventResponse]:
    aggregate = await use_case.get_by_id(event_id=event_id)
    return ApiResponse(data=EventResponse.from_domain(aggregate))


@router.put('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> ApiResponse[EventResponse]:
    aggregate = await use_case.update_event(
        principal=current_user, event_id=event_id, changes=request.to_changes()
    )
    return ApiResponse(
        message='Event updated successfully', data=EventResponse.from_domain(aggregate)
    )


@router.delete('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_event(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> MessageResponse:
    await use_case.delete_event(principal=current_user, event_id=event_id)
    return MessageResponse(message='Event deleted successfully')


@router.put('/{event_id}/publish', status_code=status.HTTP_200_OK)
@Logger.io
async def publish_event(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: PublishEventUseCase = Depends(PublishEventUseCase.depends),
) -> ApiResponse[EventResponse]:
    aggregate = await use_case.publish(principal=current_user, event_id=event_id)
    return ApiResponse(
        message='Event published successfully', data=EventResponse.from_domain(aggregate)
    )


@router.put('/{event_id}/unpublish', status_code=status.HTTP_200_OK)
@Logger.io
async def unpublish_event(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: PublishEventUseCase = Depends(PublishEventUseCase.depends),
) -> ApiResponse[EventResponse]:
    aggregate = await use_case.unpublish(principal=current_user, event_id=event_id)
    return ApiResponse(
        message='Event unpublished successfully', data=EventResponse.from_domain(aggregate)
    )


# ============================ Reservation flow ============================


@router.post('/{event_id}/check-availability', status_code=status.HTTP_200_OK)
@Logger.io
async def check_availability(
    event_id: str,
    request: AvailabilityCheckRequest,
    use_case: CheckAvailabilityUseCase = Depends(CheckAvailabilityUseCase.depends),
) -> ApiResponse[AvailabilityCheckResponse]:
    result = await use_case.check(
        event_id=event_id,
        ticket_type=request.ticket_type,
        quantity=request.quantity,
        promo_code=request.promo_code,
    )
    # A blocked check is still a successful answer; the reason travels in the payload
    return ApiResponse(message=result.message, data=AvailabilityCheckResponse.from_domain(result))


@router.post('/{event_id}/reserve', status_code=status.HTTP_200_OK)
@Logger.io
async def reserve_tickets(
    event_id: str,
    request: ReserveTicketsRequest,
    current_user: Optional[UserEntity] = Depends(get_optional_user),
    use_case: ReserveTicketsUseCase = Depends(ReserveTicketsUseCase.depends),
) -> ApiResponse[ReservationResponse]:
    with tracer.start_as_current_span('controller.reserve_tickets') as span:
        span.set_attribute('event.id', event_id)
        span.set_attribute('ticket.type', request.ticket_type)

        reservation = await use_case.reserve(
            event_id=event_id,
            ticket_type=request.ticket_type,
            quantity=request.quantity,
            promo_code=request.promo_code,
            user_info=_caller_user_info(request.user_info, current_user),
        )
        return ApiResponse(
            message='Tickets reserved. Complete the booking before the reservation expires.',
            data=ReservationResponse.from_domain(reservation),
        )


@router.post(
    '/{event_id}/reservations/{reservation_id}/release', status_code=status.HTTP_200_OK
)
@Logger.io
async def release_reservation(
    event_id: str,
    reservation_id: str,
    use_case: ReleaseReservationUseCase = Depends(ReleaseReservationUseCase.depends),
) -> MessageResponse:
    released = await use_case.release(event_id=event_id, reservation_id=reservation_id)
    if not released:
        return MessageResponse(message='Reservation was already released')
    return MessageResponse(message='Reservation released')


@router.post('/{event_id}/confirm-booking', status_code=status.HTTP_201_CREATED)
@Logger.io
async def confirm_booking(
    event_id: str,
    request: ConfirmBookingRequest,
    use_case: ConfirmBookingUseCase = Depends(ConfirmBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    with tracer.start_as_current_span('controller.confirm_booking') as span:
        span.set_attribute('event.id', event_id)
        span.set_attribute('reservation.id', request.reservation_data.reservation_id)

        result = await use_case.confirm_booking(
            event_id=event_id,
            reservation_id=request.reservation_data.reservation_id,
            payment_method=request.payment_method,
            payment_status=request.payment_status,
            payment_id=request.payment_id,
            expires_at=request.reservation_data.expires_at,
        )
        message = 'Booking already confirmed' if result.replayed else 'Booking confirmed'
        return ApiResponse(
            message=message,
            data=BookingResponse.from_domain(result.booking, event_title=result.event_title),
        )


# ============================ Administration ============================


@router.post('/{event_id}/admin-reservations', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_admin_hold(
    event_id: str,
    request: AdminHoldRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: AddAdminHoldUseCase = Depends(AddAdminHoldUseCase.depends),
) -> ApiResponse[AdminHoldResponse]:
    hold = await use_case.add_hold(
        principal=current_user,
        event_id=event_id,
        seat_number=request.seat_number,
        ticket_type=request.ticket_type,
        reserved_for=request.reserved_for.to_domain(),
        notes=request.notes,
        promo_code_used=request.promo_code_used,
    )
    return ApiResponse(message='Seat reserved', data=AdminHoldResponse.from_domain(hold))


@router.get('/{event_id}/seat-map', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def get_seat_map(
    event_id: str,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> ApiResponse[SeatMapResponse]:
    view = await use_case.get_seat_map(event_id=event_id)
    return ApiResponse(data=SeatMapResponse.from_view(view))


@router.post('/{event_id}/promo-codes', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_promo_code(
    event_id: str,
    request: PromoCodeCreateRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: AddPromoCodeUseCase = Depends(AddPromoCodeUseCase.depends),
) -> ApiResponse[PromoCodeResponse]:
    promo = await use_case.add_promo_code(
        principal=current_user,
        event_id=event_id,
        code=request.code,
        discount_type=request.discount_type,
        discount_value=request.discount_value,
        max_uses=request.max_uses,
        valid_from=request.valid_from,
        valid_until=request.valid_until,
        applicable_ticket_types=request.applicable_ticket_types,
        description=request.description,
        min_order_value=request.min_order_value,
    )
    return ApiResponse(message='Promo code added', data=PromoCodeResponse.from_domain(promo))


@router.get('/{event_id}/available-promo-codes', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def list_available_promo_codes(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: ListAvailablePromoCodesUseCase = Depends(ListAvailablePromoCodesUseCase.depends),
) -> ApiResponse[PromoCodeInventoryResponse]:
    inventory = await use_case.list_promo_codes(principal=current_user, event_id=event_id)
    return ApiResponse(data=PromoCodeInventoryResponse.from_inventory(inventory))


@router.get('/{event_id}/analytics', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def get_event_analytics(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: GetEventAnalyticsUseCase = Depends(GetEventAnalyticsUseCase.depends),
) -> ApiResponse[EventAnalyticsResponse]:
    report = await use_case.get_analytics(principal=current_user, event_id=event_id)
    return ApiResponse(data=EventAnalyticsResponse.from_report(report))
