"""
Value types shared by agent adapters.
"""

from dataclasses import dataclass
from enum import Enum


CONFIG_ERROR_MESSAGE = (
    "Foundry agent is not properly configured. "
    "Please check your environment variables."
)
NO_RESPONSE_MESSAGE = "I received your message but couldn't generate a response."
GENERIC_ERROR_MESSAGE = "Sorry, I encountered an error processing your request."


class AgentState(Enum):
    """Lifecycle of an adapter session."""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"  # Terminal: setup is never re-attempted


@dataclass(frozen=True)
class ChatMessage:
    """
    Immutable chat message returned to the caller.
    
    Attributes:
        role: Message author; adapters only produce "assistant"
        content: Message text
    """
    role: str
    content: str
    
    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role="assistant", content=content)
    
    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}
