from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum.reservation_status import ReservationStatus
from src.service.ticketing.driven_adapter.model.reservation_model import ReservationModel
from src.service.ticketing.driven_adapter.repo.event_document_mapper import (
    reservation_from_document,
    reservation_to_document,
)


class ReservationRepoImpl(IReservationRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        self.session.add(
            ReservationModel(
                reservation_id=reservation.reservation_id,
                event_id=reservation.event_id,
                status=str(reservation.status),
                expires_at=reservation.expires_at,
                booking_id=reservation.booking_id,
                document=reservation_to_document(reservation),
            )
        )
        await self.session.flush()
        return reservation

    @Logger.io
    async def get_by_id(self, *, reservation_id: str) -> Optional[Reservation]:
        result = await self.session.execute(
            select(ReservationModel).where(ReservationModel.reservation_id == reservation_id)
        )
        db_reservation = result.scalar_one_or_none()
        return reservation_from_document(db_reservation.document) if db_reservation else None

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        await self.session.execute(
            update(ReservationModel)
            .where(ReservationModel.reservation_id == reservation.reservation_id)
            .values(
                status=str(reservation.status),
                booking_id=reservation.booking_id,
                document=reservation_to_document(reservation),
            )
        )
        return reservation

    @Logger.io
    async def delete(self, *, reservation_id: str) -> bool:
        result = await self.session.execute(
            delete(ReservationModel).where(ReservationModel.reservation_id == reservation_id)
        )
        return result.rowcount > 0  # pyright: ignore[reportAttributeAccessIssue]

    @Logger.io(truncate_content=True)
    async def list_expired(self, *, now: datetime, limit: int) -> List[Reservation]:
        result = await self.session.execute(
            select(ReservationModel)
            .where(
                ReservationModel.status == ReservationStatus.ACTIVE.value,
                ReservationModel.expires_at < now,
            )
            .order_by(ReservationModel.expires_at.asc())
            .limit(limit)
        )
        return [reservation_from_document(row.document) for row in result.scalars()]
