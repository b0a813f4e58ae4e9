from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class EventModel(Base):
    """
    One row per event aggregate.

    `document` holds ticket types, promo codes, holds, seating and analytics;
    the scalar columns are denormalized copies used for listing.
    """

    __tablename__ = 'event'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default='', nullable=False)
    venue_name: Mapped[str] = mapped_column(String(255), default='', nullable=False)
    city: Mapped[str] = mapped_column(String(100), default='', nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(100), default='', nullable=False)
    country: Mapped[str] = mapped_column(String(100), default='', nullable=False)
    category: Mapped[str] = mapped_column(String(100), default='', nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String(100), default='', nullable=False)
    mode: Mapped[str] = mapped_column(String(20), default='offline', nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='draft', nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    min_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    max_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    document: Mapped[dict] = mapped_column(JSONB, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    total_views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
