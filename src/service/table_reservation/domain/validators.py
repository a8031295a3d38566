"""Domain validation helpers shared by the reservation value objects (attrs validators)."""

from datetime import datetime
import re
from typing import Any

from src.platform.exception.exceptions import ValidationError
from src.service.table_reservation.domain.business_config import (
    ContactFormat,
    CustomerLimits,
    ReservationWindow,
    TableLimits,
)


_EMAIL_RE = re.compile(ContactFormat.EMAIL_PATTERN)
_PHONE_RE = re.compile(ContactFormat.PHONE_PATTERN)


def strip_if_str(value: Any) -> Any:
    """attrs converter: trim strings, leave anything else for the validator to reject."""
    return value.strip() if isinstance(value, str) else value


class StringValidators:
    @staticmethod
    def validate_required_string(value: Any, field_name: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f'{field_name} cannot be empty')

    @staticmethod
    def validate_identifier(instance: Any, _attribute: Any, value: Any) -> None:
        StringValidators.validate_required_string(value, type(instance).__name__)


class NumericValidators:
    @staticmethod
    def validate_integer(value: Any, field_name: str) -> None:
        # bool is an int subclass, never a valid count
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(f'{field_name} must be an integer')

    @staticmethod
    def validate_capacity(_instance: Any, _attribute: Any, value: Any) -> None:
        NumericValidators.validate_integer(value, 'Capacity')
        if value < TableLimits.MIN_CAPACITY:
            raise ValidationError('Capacity must be greater than 0')
        if value > TableLimits.MAX_CAPACITY:
            raise ValidationError(f'Capacity cannot exceed {TableLimits.MAX_CAPACITY} people')

    @staticmethod
    def validate_number_of_people(value: Any) -> None:
        NumericValidators.validate_integer(value, 'Number of people')
        if value < 1:
            raise ValidationError('Number of people must be at least 1')

    @staticmethod
    def validate_duration(_instance: Any, _attribute: Any, value: Any) -> None:
        NumericValidators.validate_integer(value, 'Duration')
        if not (
            ReservationWindow.MIN_DURATION_MINUTES
            <= value
            <= ReservationWindow.MAX_DURATION_MINUTES
        ):
            raise ValidationError(
                f'Duration must be between {ReservationWindow.MIN_DURATION_MINUTES} and '
                f'{ReservationWindow.MAX_DURATION_MINUTES} minutes'
            )


class ContactValidators:
    @staticmethod
    def validate_name(_instance: Any, _attribute: Any, value: Any) -> None:
        StringValidators.validate_required_string(value, 'Customer name')
        if len(value) < CustomerLimits.MIN_NAME_LENGTH:
            raise ValidationError(
                f'Customer name must have at least {CustomerLimits.MIN_NAME_LENGTH} characters'
            )

    @staticmethod
    def validate_email(_instance: Any, _attribute: Any, value: Any) -> None:
        StringValidators.validate_required_string(value, 'Email')
        if not _EMAIL_RE.match(value):
            raise ValidationError('Invalid email format')

    @staticmethod
    def validate_phone(_instance: Any, _attribute: Any, value: Any) -> None:
        StringValidators.validate_required_string(value, 'Phone')
        if not _PHONE_RE.match(value):
            raise ValidationError('Invalid phone format')

    @staticmethod
    def validate_special_requests(_instance: Any, _attribute: Any, value: str) -> None:
        if len(value) > CustomerLimits.MAX_SPECIAL_REQUESTS_LENGTH:
            raise ValidationError(
                f'Special requests cannot exceed {CustomerLimits.MAX_SPECIAL_REQUESTS_LENGTH} characters'
            )


class TimeValidators:
    @staticmethod
    def validate_start(_instance: Any, _attribute: Any, value: Any) -> None:
        if not isinstance(value, datetime):
            raise ValidationError('Reservation date and time cannot be null')
