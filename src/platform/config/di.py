"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.platform.state.redis_client import redis_client
from src.service.table_reservation.app.service.availability_service import AvailabilityService
from src.service.table_reservation.driven_adapter.notification.background_event_dispatcher import (
    BackgroundEventDispatcher,
)
from src.service.table_reservation.driven_adapter.notification.http_notification_sender import (
    HttpEmailSender,
    HttpSmsSender,
)
from src.service.table_reservation.driven_adapter.notification.logging_notification_sender import (
    LoggingEmailSender,
    LoggingSmsSender,
)
from src.service.table_reservation.driven_adapter.notification.reservation_notifier import (
    ReservationNotifier,
)
from src.service.table_reservation.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.table_repo_impl import TableRepoImpl
from src.service.table_reservation.driven_adapter.state.in_process_table_lock import (
    InProcessTableLock,
)
from src.service.table_reservation.driven_adapter.state.redis_table_lock import RedisTableLock


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Object(settings)

    # Database (sessions come from the AsyncEngineManager of the running loop)
    database = providers.Singleton(Database)

    # Repositories outside a Unit of Work (stateless - use session_factory per call)
    table_repo = providers.Singleton(TableRepoImpl, session_factory=database.provided.session)
    reservation_command_repo = providers.Singleton(
        ReservationCommandRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )

    # Read-side availability (table listing, availability report)
    availability_service = providers.Singleton(
        AvailabilityService,
        reservation_repo=reservation_command_repo,
        table_repo=table_repo,
    )

    # Per-table critical section around check-availability + write
    table_lock = providers.Selector(
        config_service.provided.TABLE_LOCK_BACKEND,
        memory=providers.Singleton(InProcessTableLock),
        redis=providers.Singleton(
            RedisTableLock,
            redis=providers.Factory(redis_client.get_client),
        ),
    )

    # Notification senders
    email_sender = providers.Selector(
        config_service.provided.NOTIFICATION_BACKEND,
        mock=providers.Singleton(LoggingEmailSender),
        http=providers.Singleton(HttpEmailSender),
    )
    sms_sender = providers.Selector(
        config_service.provided.NOTIFICATION_BACKEND,
        mock=providers.Singleton(LoggingSmsSender),
        http=providers.Singleton(HttpSmsSender),
    )
    notifier = providers.Singleton(
        ReservationNotifier,
        email_sender=email_sender,
        sms_sender=sms_sender,
    )

    # Fire-and-forget delivery of domain events after commit
    event_dispatcher = providers.Singleton(BackgroundEventDispatcher, notifier=notifier)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
