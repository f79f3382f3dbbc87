"""Tests for mailer selection, the SMTP mailer and best-effort dispatch."""

import smtplib

import pytest
from shopfront.notifications.channel import (
    EmailDeliveryError,
    OutgoingEmail,
    get_email_channel,
    set_email_channel,
)
from shopfront.notifications.channel.fake_email import FakeMailer
from shopfront.notifications.channel.smtp_email import SmtpMailer
from shopfront.notifications.notification.dispatcher import send_email


class RecordingSMTP:
    """Stands in for ``smtplib.SMTP`` and remembers what it was asked to do."""

    instances: list["RecordingSMTP"] = []
    refuse_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        self.messages = []
        RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.calls.append("quit")

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, message):
        if RecordingSMTP.refuse_with is not None:
            raise RecordingSMTP.refuse_with
        self.messages.append(message)


@pytest.fixture
def smtp(monkeypatch):
    RecordingSMTP.instances = []
    RecordingSMTP.refuse_with = None
    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)
    return RecordingSMTP


EMAIL = OutgoingEmail(to="asha@example.com", subject="Order Placed", text="Thanks!", html="<p>Thanks!</p>")


class TestMailerSelection:
    def test_fake_mailer_by_default(self):
        assert isinstance(get_email_channel(), FakeMailer)

    def test_smtp_mailer_from_environment(self, monkeypatch):
        monkeypatch.setenv("EMAIL_BACKEND", "smtp")
        monkeypatch.setenv("EMAIL_HOST", "mail.example.com")
        monkeypatch.setenv("EMAIL_PORT", "2525")
        monkeypatch.setenv("EMAIL_USER", "shop@example.com")
        monkeypatch.setenv("EMAIL_PASS", "app-password")

        mailer = get_email_channel()

        assert isinstance(mailer, SmtpMailer)
        assert (mailer.host, mailer.port) == ("mail.example.com", 2525)
        assert mailer.sender == "shop@example.com"

    def test_smtp_defaults(self, monkeypatch):
        monkeypatch.setenv("EMAIL_BACKEND", "SMTP")
        mailer = get_email_channel()
        assert (mailer.host, mailer.port) == ("smtp.gmail.com", 587)


class TestSmtpMailer:
    def test_delivers_multipart_message_over_tls(self, smtp):
        mailer = SmtpMailer("mail.example.com", 587, "shop@example.com", "secret", sender="Shop <no-reply@example.com>")

        message_id = mailer.deliver(EMAIL)

        [connection] = smtp.instances
        assert connection.calls == ["starttls", ("login", "shop@example.com", "secret"), "quit"]
        [message] = connection.messages
        assert message["To"] == "asha@example.com"
        assert message["From"] == "Shop <no-reply@example.com>"
        assert message["Message-ID"] == message_id
        assert message.get_body(("html",)).get_content().strip() == "<p>Thanks!</p>"
        assert message.get_body(("plain",)).get_content().strip() == "Thanks!"

    def test_anonymous_relay_skips_login(self, smtp):
        SmtpMailer("relay.internal", 25, use_tls=False).deliver(EMAIL)
        assert smtp.instances[0].calls == ["quit"]

    def test_refusal_becomes_delivery_error(self, smtp):
        smtp.refuse_with = smtplib.SMTPRecipientsRefused({"asha@example.com": (550, b"no such user")})
        with pytest.raises(EmailDeliveryError):
            SmtpMailer("mail.example.com").deliver(EMAIL)

    def test_unreachable_server_becomes_delivery_error(self, monkeypatch):
        def unreachable(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(smtplib, "SMTP", unreachable)
        with pytest.raises(EmailDeliveryError):
            SmtpMailer("mail.example.com").deliver(EMAIL)


class TestSendEmail:
    def test_body_is_escaped_into_html(self):
        assert send_email("asha@example.com", "Hi", "Tom & Jerry <3") is True

        [mail] = get_email_channel().outbox
        assert mail.text == "Tom & Jerry <3"
        assert mail.html == "<p>Tom &amp; Jerry &lt;3</p>"

    def test_delivery_failure_is_reported_not_raised(self):
        get_email_channel().fail_with("mailbox full")
        assert send_email("asha@example.com", "Hi", "Hello") is False

    def test_smtp_failure_is_reported_not_raised(self, smtp):
        smtp.refuse_with = smtplib.SMTPServerDisconnected("gone")
        set_email_channel(SmtpMailer("mail.example.com"))
        assert send_email("asha@example.com", "Hi", "Hello") is False
