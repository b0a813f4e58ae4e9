from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DuplicateKeyError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.repo.event_document_mapper import (
    booking_from_document,
    booking_to_document,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    async def _get_where(self, clause) -> Optional[Booking]:
        result = await self.session.execute(select(BookingModel).where(clause))
        db_booking = result.scalar_one_or_none()
        return booking_from_document(db_booking.document) if db_booking else None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            booking_id=booking.booking_id,
            reservation_id=booking.reservation_id,
            event_id=booking.event_id,
            user_id=booking.user_info.user_id or '',
            status=str(booking.booking_status),
            created_at=booking.created_at,
            document=booking_to_document(booking),
        )
        try:
            # Savepoint keeps the outer transaction usable after a unique violation
            async with self.session.begin_nested():
                self.session.add(db_booking)
        except IntegrityError as e:
            key = 'reservation_id' if 'reservation_id' in str(e.orig) else 'booking_id'
            raise DuplicateKeyError(f'Booking {key} already taken', key=key) from e

        Logger.base.info(f'💾 [BOOKING] Stored booking {booking.booking_id}')
        return booking

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.booking_id == booking.booking_id)
            .values(status=str(booking.booking_status), document=booking_to_document(booking))
        )
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        return await self._get_where(BookingModel.booking_id == booking_id)

    @Logger.io
    async def get_by_reservation_id(self, *, reservation_id: str) -> Optional[Booking]:
        return await self._get_where(BookingModel.reservation_id == reservation_id)
