from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.repo.event_document_mapper import booking_from_document


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.booking_id == booking_id)
        )
        db_booking = result.scalar_one_or_none()
        return booking_from_document(db_booking.document) if db_booking else None

    @Logger.io(truncate_content=True)
    async def list_by_event(self, *, event_id: str) -> List[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.event_id == event_id)
            .order_by(BookingModel.created_at.asc())
        )
        return [booking_from_document(db_booking.document) for db_booking in result.scalars()]
