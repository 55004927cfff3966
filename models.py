from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class ContactSubmission:
    """A visitor's name/email/message triple. Lives for one request only."""
    name: str
    email: str
    message: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class EmailMessage:
    sender_email: str
    sender_name: str
    recipient_email: str
    recipient_name: str
    subject: str
    html_body: str
    text_body: str
    reply_to: Optional[str] = None


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def sent(cls, message_id):
        return cls(ok=True, message_id=str(message_id))

    @classmethod
    def failed(cls, error):
        return cls(ok=False, error=str(error))
