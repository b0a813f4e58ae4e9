from typing import Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.update_booking_attendance_use_case import (
    UpdateBookingAttendanceUseCase,
)
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_event_manager,
)
from src.service.ticketing.driving_adapter.schema.booking_schema import (
    BookingResponse,
    CancelBookingRequest,
)
from src.service.ticketing.driving_adapter.schema.common_schema import ApiResponse


router = APIRouter()


@router.get('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    booking_id: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    """The person who booked, or a manager of the event."""
    booking = await use_case.get_booking(principal=current_user, booking_id=booking_id)
    return ApiResponse(data=BookingResponse.from_domain(booking))


@router.post('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: str,
    request: Optional[CancelBookingRequest] = None,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    booking = await use_case.cancel_booking(
        principal=current_user,
        booking_id=booking_id,
        reason=request.reason if request else None,
    )
    return ApiResponse(message='Booking cancelled', data=BookingResponse.from_domain(booking))


@router.post('/{booking_id}/check-in', status_code=status.HTTP_200_OK)
@Logger.io
async def check_in_booking(
    booking_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: UpdateBookingAttendanceUseCase = Depends(UpdateBookingAttendanceUseCase.depends),
) -> ApiResponse[BookingResponse]:
    booking = await use_case.check_in(principal=current_user, booking_id=booking_id)
    return ApiResponse(message='Checked in', data=BookingResponse.from_domain(booking))


@router.post('/{booking_id}/no-show', status_code=status.HTTP_200_OK)
@Logger.io
async def mark_booking_no_show(
    booking_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: UpdateBookingAttendanceUseCase = Depends(UpdateBookingAttendanceUseCase.depends),
) -> ApiResponse[BookingResponse]:
    booking = await use_case.mark_no_show(principal=current_user, booking_id=booking_id)
    return ApiResponse(message='Marked as no-show', data=BookingResponse.from_domain(booking))
