"""
HTTP notification senders

Post messages to the email/SMS providers' `/send` endpoints.
Non-2xx answers raise `httpx.HTTPStatusError`; the dispatcher logs it.
"""

from typing import Optional

import httpx

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_notification_sender import (
    IEmailSender,
    ISmsSender,
)


class _HttpSender:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.timeout = (
            settings.NOTIFICATION_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self.transport = transport

    async def _post(self, payload: dict) -> None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(f'{self.base_url}/send', json=payload)
            response.raise_for_status()


class HttpEmailSender(_HttpSender, IEmailSender):
    def __init__(self, *, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(base_url=base_url or settings.EMAIL_API_BASE_URL, **kwargs)

    @Logger.io(truncate_content=True)
    async def send_email(self, *, to: str, subject: str, body: str) -> None:
        await self._post({'to': to, 'subject': subject, 'body': body})
        Logger.base.info(f'📧 [EMAIL] Sent "{subject}" to {to}')


class HttpSmsSender(_HttpSender, ISmsSender):
    def __init__(self, *, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(base_url=base_url or settings.SMS_API_BASE_URL, **kwargs)

    @Logger.io
    async def send_sms(self, *, phone: str, message: str) -> None:
        await self._post({'to': phone, 'message': message})
        Logger.base.info(f'📱 [SMS] Sent to {phone}')
