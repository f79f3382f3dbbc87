"""SMTP mailer — plain SMTP upgraded with STARTTLS, one connection per message."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from shopfront.notifications.channel.email_port import EmailDeliveryError, EmailPort, OutgoingEmail

logger = structlog.get_logger(__name__)


class SmtpMailer(EmailPort):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_tls = use_tls
        self.timeout = timeout

    def compose(self, email: OutgoingEmail) -> EmailMessage:
        message = EmailMessage()
        if self.sender:
            message["From"] = self.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid()
        message.set_content(email.text)
        if email.html:
            message.add_alternative(email.html, subtype="html")
        return message

    def deliver(self, email: OutgoingEmail) -> str:
        message = self.compose(email)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery failed", host=self.host, to=email.to, error=str(exc))
            raise EmailDeliveryError(str(exc)) from exc

        logger.debug("Email handed to SMTP server", host=self.host, to=email.to)
        return message["Message-ID"]
