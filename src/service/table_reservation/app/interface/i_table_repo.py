from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.value_object.identifiers import TableId


class ITableRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, table_id: TableId) -> Optional[Table]:
        pass

    @abstractmethod
    async def list_active(self) -> List[Table]:
        pass

    @abstractmethod
    async def list_by_min_capacity(self, *, number_of_people: int) -> List[Table]:
        """Active tables seating at least `number_of_people`, smallest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Table]:
        pass

    @abstractmethod
    async def save(self, *, table: Table) -> Table:
        pass
