"""Outgoing mail: the message shape and the interface every mailer implements."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class EmailDeliveryError(Exception):
    """The mailer could not hand the message over for delivery."""


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    text: str
    html: str | None = None


class EmailPort(ABC):
    @abstractmethod
    def deliver(self, email: OutgoingEmail) -> str:
        """Hand ``email`` to the transport and return its message id.

        Raises ``EmailDeliveryError`` when the transport refuses it.
        """
