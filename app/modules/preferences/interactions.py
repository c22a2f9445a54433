"""Platform-agnostic interaction models and the outbound message sink.

The messaging transport translates its native updates into an Interaction
and implements MessageSink; everything in this module stays transport-free.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass
class Originator:
    """The user an inbound event came from.

    Attributes:
        id: Platform user id (e.g. a Telegram numeric id)
        username: Platform username, if the user has one
    """

    id: Union[int, str]
    username: Optional[str] = None


@dataclass(frozen=True)
class MessageRef:
    """Address of an existing message that can be edited in place."""

    chat_id: Union[int, str]
    message_id: Union[int, str]


@dataclass(frozen=True)
class InlineButton:
    """One interactive control: visible text plus the payload sent back on press."""

    text: str
    callback_data: str


Controls = List[List[InlineButton]]


@dataclass
class Interaction:
    """One inbound event the system must respond to.

    Attributes:
        originator: Sender of the event; None for anonymous channel posts
        chat_id: Conversation the reply goes to
        callback_message: Set when the event is a button press on an
            existing message, which is then edited instead of replied to
        correlation_id: For tracing one interaction through the logs
    """

    originator: Optional[Originator]
    chat_id: Optional[Union[int, str]] = None
    callback_message: Optional[MessageRef] = None
    correlation_id: str = ""

    def __post_init__(self):
        """Generate correlation ID if not provided."""
        if not self.correlation_id:
            self.correlation_id = str(uuid.uuid4())

    @property
    def is_callback(self) -> bool:
        return self.callback_message is not None


class MessageSink(ABC):
    """Outbound side of the messaging transport for one interaction."""

    @abstractmethod
    async def reply(self, text: str, controls: Optional[Controls] = None) -> None:
        """Send ``text`` as a new message in the interaction's chat."""
        raise NotImplementedError()

    @abstractmethod
    async def edit_message(
        self, ref: MessageRef, text: str, controls: Optional[Controls] = None
    ) -> None:
        """Replace the text and controls of an existing message."""
        raise NotImplementedError()
