"""Mock senders: log instead of delivering, and keep what was sent for inspection."""

from datetime import datetime
from typing import List

from src.platform.clock import local_now
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_notification_sender import (
    IEmailSender,
    ISmsSender,
)


class LoggingEmailSender(IEmailSender):
    def __init__(self) -> None:
        self.sent_emails: List[dict] = []

    async def send_email(self, *, to: str, subject: str, body: str) -> None:
        sent_at: datetime = local_now()
        self.sent_emails.append({'to': to, 'subject': subject, 'body': body, 'sent_at': sent_at})
        Logger.base.info(f'📧 [MOCK EMAIL] To: {to} | Subject: {subject}\n{body}')


class LoggingSmsSender(ISmsSender):
    def __init__(self) -> None:
        self.sent_sms: List[dict] = []

    async def send_sms(self, *, phone: str, message: str) -> None:
        self.sent_sms.append({'to': phone, 'message': message, 'sent_at': local_now()})
        Logger.base.info(f'📱 [MOCK SMS] To: {phone} | {message}')
