"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.table_reservation.app.command import (
    cancel_reservation_use_case,
    complete_reservation_use_case,
    confirm_reservation_use_case,
    create_reservation_use_case,
    mark_no_show_reservation_use_case,
    update_reservation_use_case,
)
from src.service.table_reservation.app.query import (
    get_availability_report_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    list_tables_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    update_reservation_use_case,
    confirm_reservation_use_case,
    cancel_reservation_use_case,
    complete_reservation_use_case,
    mark_no_show_reservation_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    list_tables_use_case,
    get_availability_report_use_case,
]
