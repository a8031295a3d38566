from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'table_id': 'T003',
                'customer_name': 'Maria Silva',
                'customer_email': 'maria@example.com',
                'customer_phone': '(11) 98765-4321',
                'reservation_date_time': '2025-07-15T19:30:00',
                'number_of_people': 4,
                'duration_minutes': 120,
                'special_requests': 'Window seat',
            }
        }
    )

    table_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    reservation_date_time: datetime
    number_of_people: int
    duration_minutes: Optional[int] = None  # Defaults to 120
    special_requests: Optional[str] = None


class UpdateReservationRequest(BaseModel):
    """Omitted fields keep their current value"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'table_id': 'T004',
                'reservation_date_time': '2025-07-15T20:00:00',
                'duration_minutes': 90,
                'number_of_people': 3,
            }
        }
    )

    table_id: Optional[str] = None
    reservation_date_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    number_of_people: Optional[int] = None


class ReservationResponse(BaseModel):
    id: str
    table_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    special_requests: str
    reservation_date_time: datetime
    end_time: datetime
    duration_minutes: int
    number_of_people: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> 'ReservationResponse':
        info = reservation.customer_info
        slot = reservation.reservation_time
        return cls(
            id=str(reservation.id),
            table_id=str(reservation.table_id),
            customer_name=info.name,
            customer_email=info.email,
            customer_phone=info.phone,
            special_requests=info.special_requests,
            reservation_date_time=slot.start,
            end_time=slot.end_time,
            duration_minutes=slot.duration_minutes,
            number_of_people=reservation.number_of_people,
            status=reservation.status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class AvailabilityReportResponse(BaseModel):
    table_id: str
    date: date
    total_reservations: int
    available_slots: int
    occupancy_rate: float
    is_fully_occupied: bool
    reservations: list[ReservationResponse]
