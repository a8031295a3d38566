from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (Index('ix_reservation_table_start', 'table_id', 'start_time'),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7
    table_id: Mapped[str] = mapped_column(
        String(20), ForeignKey('restaurant_table.id'), nullable=False
    )
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    customer_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    special_requests: Mapped[str] = mapped_column(Text, nullable=False, default='')
    # Restaurant-local wall clock, naive
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_people: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
