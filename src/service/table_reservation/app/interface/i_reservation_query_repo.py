from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId


class IReservationQueryRepo(ABC):
    """Repository interface for reservation read operations"""

    @abstractmethod
    async def get_by_id(self, *, reservation_id: ReservationId) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_by_customer_email(self, *, email: str) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_date(self, *, on_date: date) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_status(self, *, status: ReservationStatus) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_table_and_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        pass
