import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A product as returned by the catalog endpoint.

    Attributes:
        id: Stable product identifier.
        name: Display name.
        description: Short product description.
        price: Non-negative price.
        image_url: Product image reference.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    image_url: str = ""


class ChatRole(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    MODEL = "model"
    ERROR = "error"


class ChatMessage(BaseModel):
    """A single entry in the chat transcript.

    Messages are frozen. Streaming into a message replaces it with a copy
    carrying the same id and the extended text.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def time_label(self) -> str:
        return self.created_at.strftime("%I:%M %p")


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class RelayChatRequest(BaseModel):
    """Request payload for the chat relay endpoints.

    Attributes:
        message: User's question.
        session_id: Optional session for conversation continuity.
    """

    message: str = Field(..., min_length=1)
    session_id: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class RelayChatResponse(BaseModel):
    """Complete reply from the non-streaming relay."""

    reply: str
    session_id: str


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
