"""
Reservation Notifier

Turns reservation domain events into guest-facing email/SMS messages.
"""

from typing import assert_never

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_notification_sender import (
    IEmailSender,
    ISmsSender,
)
from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationCancelled,
    ReservationCompleted,
    ReservationConfirmed,
    ReservationDomainEvent,
    ReservationMarkedNoShow,
    ReservationModified,
)


_SIGNATURE = 'Kind regards,\nThe Restaurant Team'


def _confirmation_body(event: ReservationConfirmed) -> str:
    info = event.customer_info
    return (
        f'Hello {info.formatted_name},\n\n'
        'Your reservation has been confirmed!\n\n'
        'Reservation details:\n'
        f'- Date and time: {event.reservation_time.formatted}\n'
        f'- Table: {event.table_id}\n'
        f'- Email: {info.email}\n'
        f'- Phone: {info.phone}\n\n'
        'We look forward to seeing you!\n\n'
        f'{_SIGNATURE}\n'
    )


def _cancellation_body(event: ReservationCancelled) -> str:
    return (
        f'Hello {event.customer_info.formatted_name},\n\n'
        'Your reservation has been cancelled as requested.\n\n'
        'Cancelled reservation:\n'
        f'- Date and time: {event.reservation_time.formatted}\n'
        f'- Table: {event.table_id}\n\n'
        'We hope to welcome you another time!\n\n'
        f'{_SIGNATURE}\n'
    )


def _completion_body(event: ReservationCompleted) -> str:
    return (
        f'Hello {event.customer_info.formatted_name},\n\n'
        'Thank you for dining with us!\n\n'
        'We hope you had a great experience. Your feedback matters to us.\n\n'
        'Visit details:\n'
        f'- Date and time: {event.reservation_time.formatted}\n'
        f'- Table: {event.table_id}\n\n'
        f'{_SIGNATURE}\n'
    )


def _modification_body(event: ReservationModified) -> str:
    return (
        f'Hello {event.customer_info.formatted_name},\n\n'
        'Your reservation has been changed.\n\n'
        'New details:\n'
        f'- Date and time: {event.reservation_time.formatted}\n'
        f'- Table: {event.table_id}\n\n'
        'Previous details:\n'
        f'- Date and time: {event.previous_reservation_time.formatted}\n'
        f'- Table: {event.previous_table_id}\n\n'
        'If you did not request this change, please contact us.\n\n'
        f'{_SIGNATURE}\n'
    )


class ReservationNotifier:
    def __init__(self, *, email_sender: IEmailSender, sms_sender: ISmsSender) -> None:
        self.email_sender = email_sender
        self.sms_sender = sms_sender

    @Logger.io
    async def notify(self, event: ReservationDomainEvent) -> None:
        info = event.customer_info
        match event:
            case ReservationConfirmed():
                await self.email_sender.send_email(
                    to=info.email,
                    subject=f'Reservation Confirmed - {info.name}',
                    body=_confirmation_body(event),
                )
                await self.sms_sender.send_sms(
                    phone=info.phone,
                    message=(
                        f'Your reservation is confirmed for {event.reservation_time.formatted} '
                        f'at table {event.table_id}. Thank you!'
                    ),
                )
            case ReservationCancelled():
                await self.email_sender.send_email(
                    to=info.email,
                    subject=f'Reservation Cancelled - {info.name}',
                    body=_cancellation_body(event),
                )
            case ReservationCompleted():
                await self.email_sender.send_email(
                    to=info.email,
                    subject=f'Thank you for your visit - {info.name}',
                    body=_completion_body(event),
                )
            case ReservationModified():
                await self.email_sender.send_email(
                    to=info.email,
                    subject=f'Reservation Modified - {info.name}',
                    body=_modification_body(event),
                )
            case ReservationMarkedNoShow():
                Logger.base.info(
                    f'🚫 [NOTIFICATION] No-show recorded for reservation {event.reservation_id}'
                )
                return
            case _:
                assert_never(event)

        Logger.base.info(
            f'📨 [NOTIFICATION] {event.event_type} notifications sent for reservation '
            f'{event.reservation_id}'
        )
