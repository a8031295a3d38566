from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.service.table_reservation.domain.entity.table_entity import Table


class TableResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {'id': 'T003', 'capacity': 4, 'is_active': True, 'location': 'Indoor'}
        }
    )

    id: str
    capacity: int
    is_active: bool
    location: Optional[str] = None

    @classmethod
    def from_table(cls, table: Table) -> 'TableResponse':
        return cls(
            id=str(table.id),
            capacity=table.capacity.value,
            is_active=table.is_active,
            location=table.location,
        )
