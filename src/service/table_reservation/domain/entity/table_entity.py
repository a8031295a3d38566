from typing import Optional

import attrs

from src.platform.exception.exceptions import CapacityError
from src.service.table_reservation.domain.value_object.capacity import Capacity
from src.service.table_reservation.domain.value_object.identifiers import TableId


@attrs.define(eq=False)
class Table:
    id: TableId = attrs.field(validator=attrs.validators.instance_of(TableId))
    capacity: Capacity = attrs.field(validator=attrs.validators.instance_of(Capacity))
    is_active: bool = True
    location: Optional[str] = None

    def can_accommodate(self, number_of_people: int) -> bool:
        return self.is_active and self.capacity.can_accommodate(number_of_people)

    def ensure_can_accommodate(self, number_of_people: int) -> None:
        if not self.is_active:
            raise CapacityError(f'Table {self.id} is not active')
        if not self.capacity.can_accommodate(number_of_people):
            raise CapacityError(
                f'Table {self.id} seats {self.capacity} people, cannot accommodate {number_of_people}'
            )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Table) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
