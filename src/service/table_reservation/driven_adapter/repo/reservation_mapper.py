"""Mapping between ReservationModel rows and the Reservation aggregate"""

from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime
from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel


def to_entity(db_reservation: ReservationModel) -> Reservation:
    """Rehydrate without business validation: stored reservations may lie in the past."""
    return Reservation(
        id=ReservationId(db_reservation.id),
        table_id=TableId(db_reservation.table_id),
        customer_info=CustomerInfo(
            name=db_reservation.customer_name,
            email=db_reservation.customer_email,
            phone=db_reservation.customer_phone,
            special_requests=db_reservation.special_requests,
        ),
        reservation_time=ReservationTime(
            start=db_reservation.start_time,
            duration_minutes=db_reservation.duration_minutes,
        ),
        number_of_people=db_reservation.number_of_people,
        status=ReservationStatus(db_reservation.status),
        created_at=db_reservation.created_at,
        updated_at=db_reservation.updated_at,
    )


def copy_to_model(reservation: Reservation, db_reservation: ReservationModel) -> None:
    customer = reservation.customer_info
    db_reservation.table_id = str(reservation.table_id)
    db_reservation.customer_name = customer.name
    db_reservation.customer_email = customer.email
    db_reservation.customer_phone = customer.phone
    db_reservation.special_requests = customer.special_requests
    db_reservation.start_time = reservation.reservation_time.start
    db_reservation.duration_minutes = reservation.reservation_time.duration_minutes
    db_reservation.number_of_people = reservation.number_of_people
    db_reservation.status = reservation.status.value
