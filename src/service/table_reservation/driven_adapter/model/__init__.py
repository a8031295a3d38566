"""ORM models (imported so Base.metadata knows every table)"""

from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel
from src.service.table_reservation.driven_adapter.model.table_model import TableModel

__all__ = ['ReservationModel', 'TableModel']
