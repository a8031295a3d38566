import attrs
import uuid_utils

from src.service.table_reservation.domain.validators import StringValidators, strip_if_str


@attrs.frozen
class TableId:
    value: str = attrs.field(converter=strip_if_str, validator=StringValidators.validate_identifier)

    def __str__(self) -> str:
        return self.value


@attrs.frozen
class ReservationId:
    value: str = attrs.field(converter=strip_if_str, validator=StringValidators.validate_identifier)

    @classmethod
    def generate(cls) -> 'ReservationId':
        return cls(str(uuid_utils.uuid7()))

    def __str__(self) -> str:
        return self.value
