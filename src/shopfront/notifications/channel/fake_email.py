"""In-memory mailer used in development and tests."""

from uuid import uuid4

from shopfront.notifications.channel.email_port import EmailDeliveryError, EmailPort, OutgoingEmail


class FakeMailer(EmailPort):
    """Keeps delivered mail in ``outbox``; ``fail_with`` makes the next sends fail."""

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self.failure: str | None = None

    def fail_with(self, reason: str | None) -> None:
        self.failure = reason

    def deliver(self, email: OutgoingEmail) -> str:
        if self.failure:
            raise EmailDeliveryError(self.failure)
        self.outbox.append(email)
        return f"fake-{uuid4().hex[:12]}"

    def addressed_to(self, recipient: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.to == recipient]
