"""Application layer interfaces (Ports)"""

from src.service.table_reservation.app.interface.i_notification_sender import (
    IEmailSender,
    ISmsSender,
)
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo

__all__ = [
    'IEmailSender',
    'IReservationCommandRepo',
    'IReservationEventDispatcher',
    'IReservationQueryRepo',
    'ISmsSender',
    'ITableLock',
    'ITableRepo',
]
