from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId


class IReservationCommandRepo(ABC):
    """Repository interface for the reservation write path"""

    @abstractmethod
    async def get_by_id(self, *, reservation_id: ReservationId) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def find_for_table_on_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        """All reservations of the table starting on `on_date`, any status"""
        pass

    @abstractmethod
    async def save(self, *, reservation: Reservation) -> Reservation:
        """Insert or update; assigns created_at on insert and refreshes updated_at"""
        pass
