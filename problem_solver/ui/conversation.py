"""Conversation state for one browser session.

A ConversationStore lives exactly as long as the page that created it; the
transcript is never persisted.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome, Engineer. I am your specialized AI assistant. "
    "How can I assist you with your technical problems today?"
)
FAILURE_MESSAGE = (
    "Error: Failed to process your request. Please ensure the server is running."
)


def _now() -> str:
    return datetime.now().strftime("%I:%M %p")


class Message(BaseModel):
    """A single entry of the transcript."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    text: str
    attachment_name: str | None = None
    time: str = Field(default_factory=_now)


class PendingAttachment(BaseModel):
    """A file selected by the user but not yet sent.

    Attributes:
        content: Raw file bytes.
        mime_type: MIME type reported by the browser.
        name: Original filename.
    """

    content: bytes
    mime_type: str
    name: str


class ChatSender(Protocol):
    async def send_chat(
        self, message: str, model: str, attachment: PendingAttachment | None
    ) -> str: ...


class ConversationStore:
    """Transcript and pending-attachment state for one session.

    Only one turn may be in flight at a time; ``awaiting_response`` is set
    between ``append_user_turn`` and ``complete_turn`` and the UI keeps the
    send button disabled while it is true.
    """

    def __init__(self, greeting: str | None = WELCOME_MESSAGE) -> None:
        self._greeting = greeting
        self.messages: list[Message] = []
        self.draft: str = ""
        self.pending_attachment: PendingAttachment | None = None
        self.awaiting_response: bool = False
        self.model: str = "flash"
        self.reset()

    def reset(self) -> None:
        """Start a new chat, keeping only the greeting."""
        self.messages = []
        if self._greeting:
            self.messages.append(Message(role="assistant", text=self._greeting))
        self.draft = ""
        self.pending_attachment = None

    def select_attachment(self, attachment: PendingAttachment) -> None:
        """Set the pending attachment, replacing any previous one."""
        self.pending_attachment = attachment

    def clear_attachment(self) -> None:
        self.pending_attachment = None

    def append_user_turn(
        self, text: str, attachment: PendingAttachment | None = None
    ) -> Message | None:
        """Record the user's side of a turn.

        Returns:
            The appended message, or None if there was nothing to send or a
            turn is already in flight.
        """
        if self.awaiting_response:
            return None
        if not text.strip() and attachment is None:
            return None

        message = Message(
            role="user",
            text=text,
            attachment_name=attachment.name if attachment else None,
        )
        self.messages.append(message)
        self.draft = ""
        self.pending_attachment = None
        self.awaiting_response = True
        return message

    def complete_turn(self, result: str | Exception | None) -> Message:
        """Record the assistant's reply, or the failure message."""
        text = result if isinstance(result, str) else FAILURE_MESSAGE
        message = Message(role="assistant", text=text)
        self.messages.append(message)
        self.awaiting_response = False
        return message

    async def send(
        self,
        text: str,
        sender: ChatSender,
        on_sent: Callable[[], None] | None = None,
    ) -> Message | None:
        """Run one full turn against the chat API.

        Uses the pending attachment, if any. ``on_sent`` is called once the
        user entry is recorded, before the request goes out. The reply, or
        the failure message, is appended as the assistant's entry.

        Returns:
            The assistant message, or None if the turn was not sent.
        """
        attachment = self.pending_attachment
        if self.append_user_turn(text, attachment) is None:
            return None
        if on_sent is not None:
            on_sent()

        try:
            reply: str | Exception = await sender.send_chat(text, self.model, attachment)
        except Exception as e:
            logger.error(f"Error sending message: {e}")
            reply = e
        finally:
            self.pending_attachment = None

        return self.complete_turn(reply)
