import attrs

from src.service.table_reservation.domain.validators import NumericValidators


@attrs.frozen
class Capacity:
    """Seats at a table, 1 to 20."""

    value: int = attrs.field(validator=NumericValidators.validate_capacity)

    def can_accommodate(self, number_of_people: int) -> bool:
        return self.value >= number_of_people

    def remaining_space(self, number_of_people: int) -> int:
        return max(0, self.value - number_of_people)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
