"""Email channel factory.

Provides get_email_channel() / set_email_channel() to swap mailers:
- FakeMailer for development and testing (the default)
- SmtpMailer when EMAIL_BACKEND=smtp, configured from EMAIL_HOST, EMAIL_PORT,
  EMAIL_USER, EMAIL_PASS and EMAIL_FROM
"""

import os

from shopfront.notifications.channel.email_port import EmailDeliveryError, EmailPort, OutgoingEmail
from shopfront.notifications.channel.fake_email import FakeMailer

_email_channel: EmailPort | None = None


def _build_mailer() -> EmailPort:
    if os.getenv("EMAIL_BACKEND", "fake").lower() == "smtp":
        from shopfront.notifications.channel.smtp_email import SmtpMailer

        return SmtpMailer(
            host=os.getenv("EMAIL_HOST", "smtp.gmail.com"),
            port=int(os.getenv("EMAIL_PORT", "587")),
            username=os.getenv("EMAIL_USER"),
            password=os.getenv("EMAIL_PASS"),
            sender=os.getenv("EMAIL_FROM"),
        )
    return FakeMailer()


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        _email_channel = _build_mailer()
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_channels() -> None:
    global _email_channel
    _email_channel = None


__all__ = [
    "EmailDeliveryError",
    "EmailPort",
    "OutgoingEmail",
    "get_email_channel",
    "reset_channels",
    "set_email_channel",
]
