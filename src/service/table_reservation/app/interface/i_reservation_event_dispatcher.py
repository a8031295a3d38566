from abc import ABC, abstractmethod

from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
)


class IReservationEventDispatcher(ABC):
    @abstractmethod
    def dispatch(self, event: ReservationDomainEvent) -> None:
        """Fire-and-forget: must not raise and must not wait for delivery"""
        pass

    @abstractmethod
    async def wait_until_idle(self) -> None:
        pass
