import datetime as dt
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventhub.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from eventhub.service.ticketing.driven_adapter.model.user_model import UserModel


class EventModel(Base):
    __tablename__ = 'event'
    __table_args__ = (
        CheckConstraint('available_tickets >= 0', name='ck_event_available_non_negative'),
        CheckConstraint(
            'available_tickets <= total_tickets', name='ck_event_available_within_capacity'
        ),
        CheckConstraint('price >= 0', name='ck_event_price_non_negative'),
        # Ids are never reused, so a booking that outlived its event cannot attach to a new one
        {'sqlite_autoincrement': True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organizer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(20), default='other', nullable=False, index=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    available_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='upcoming', nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    organizer: Mapped[Optional['UserModel']] = relationship(
        'UserModel', foreign_keys=[organizer_id], viewonly=True, lazy='selectin'
    )

    def __repr__(self):
        return (
            f'<EventModel(id={self.id}, title={self.title}, '
            f'available={self.available_tickets}/{self.total_tickets})>'
        )
