from typing import Any, Optional

import attrs

from src.service.table_reservation.domain.validators import ContactValidators, strip_if_str


def _normalize_email(value: Any) -> Any:
    value = strip_if_str(value)
    return value.lower() if isinstance(value, str) else value


def _normalize_special_requests(value: Optional[str]) -> str:
    return '' if value is None else str(value).strip()


@attrs.frozen
class CustomerInfo:
    """
    Contact details of the guest holding a reservation.

    Fields are trimmed and the email lower-cased on construction.
    Two CustomerInfo are equal when name, email and phone match; special
    requests are ignored.
    """

    name: str = attrs.field(converter=strip_if_str, validator=ContactValidators.validate_name)
    email: str = attrs.field(converter=_normalize_email, validator=ContactValidators.validate_email)
    phone: str = attrs.field(converter=strip_if_str, validator=ContactValidators.validate_phone)
    special_requests: str = attrs.field(
        default='',
        converter=_normalize_special_requests,
        validator=ContactValidators.validate_special_requests,
        eq=False,
    )

    @property
    def has_special_requests(self) -> bool:
        return bool(self.special_requests)

    @property
    def formatted_name(self) -> str:
        return self.name[:1].upper() + self.name[1:].lower()
