from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventhub.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from eventhub.service.ticketing.driven_adapter.model.event_model import EventModel
    from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        CheckConstraint('tickets_booked >= 1', name='ck_booking_tickets_positive'),
        CheckConstraint('total_amount >= 0', name='ck_booking_amount_non_negative'),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('user.id'), nullable=False, index=True)
    # No foreign key: bookings outlive a deleted event
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tickets_booked: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False, index=True)
    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    user: Mapped[Optional['UserModel']] = relationship(
        'UserModel', foreign_keys=[user_id], viewonly=True, lazy='selectin'
    )
    event: Mapped[Optional['EventModel']] = relationship(
        'EventModel',
        primaryjoin='foreign(BookingModel.event_id) == EventModel.id',
        viewonly=True,
        lazy='selectin',
    )
