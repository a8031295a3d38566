from abc import ABC, abstractmethod


class IEmailSender(ABC):
    @abstractmethod
    async def send_email(self, *, to: str, subject: str, body: str) -> None:
        pass


class ISmsSender(ABC):
    @abstractmethod
    async def send_sms(self, *, phone: str, message: str) -> None:
        pass
