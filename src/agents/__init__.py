"""
Agents module - adapters that relay chat messages to hosted agent services.

Components:
- FoundryTaskAgent: Session adapter for Azure AI Foundry Agent Service
- FoundryConfig: Immutable endpoint/agent configuration
- ConversationServiceClient: Narrow interface over the remote service
"""

from src.agents.config import FoundryConfig
from src.agents.foundry_task_agent import FoundryTaskAgent
from src.agents.models import AgentState, ChatMessage
from src.agents.service_client import AzureFoundryClient, ConversationServiceClient

__all__ = [
    "AgentState",
    "AzureFoundryClient",
    "ChatMessage",
    "ConversationServiceClient",
    "FoundryConfig",
    "FoundryTaskAgent",
]
