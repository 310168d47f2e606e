"""
Conversation Service Client - Narrow interface over Foundry Agent Service

Describes only the operations the task agent actually uses, so the adapter
can be exercised against an in-memory fake in tests.

Remote operations:
- connect: project client + OpenAI-compatible conversations sub-client
- create_conversation: new empty server-side conversation
- append_user_message: add one user turn to a conversation
- generate_response: run a named agent against a conversation
"""

import abc
from typing import Any, Optional
import structlog
from azure.ai.projects.aio import AIProjectClient
from azure.identity.aio import DefaultAzureCredential

logger = structlog.get_logger()

AGENT_REFERENCE_TYPE = "agent_reference"


class ConversationServiceClient(abc.ABC):
    """Operations consumed from the remote conversational-agent service."""

    @abc.abstractmethod
    async def connect(self) -> None:
        """Establish the client handle and conversations sub-client."""

    @abc.abstractmethod
    async def create_conversation(self) -> str:
        """Create an empty conversation and return its identifier."""

    @abc.abstractmethod
    async def append_user_message(self, conversation_id: str, content: str) -> None:
        """Append a single user message to the conversation."""

    @abc.abstractmethod
    async def generate_response(self, conversation_id: str, agent_name: str) -> Optional[str]:
        """
        Generate the agent's reply for a conversation.
        
        Returns:
            Generated text, or None when the service produced no text
        """


class AzureFoundryClient(ConversationServiceClient):
    """
    ConversationServiceClient backed by the Azure AI Projects SDK.
    
    Authentication uses DefaultAzureCredential (environment, managed
    identity, Azure CLI login, ...) unless a credential is supplied.
    
    Example:
        client = AzureFoundryClient("https://<resource>.services.ai.azure.com/api/projects/<project>")
        await client.connect()
        conversation_id = await client.create_conversation()
    """
    
    def __init__(self, endpoint: str, credential: Optional[Any] = None):
        self.endpoint = endpoint
        self._credential = credential
        self.project: Optional[AIProjectClient] = None
        self.openai_client: Optional[Any] = None
    
    async def connect(self) -> None:
        if self._credential is None:
            self._credential = DefaultAzureCredential()
        self.project = AIProjectClient(endpoint=self.endpoint, credential=self._credential)
        self.openai_client = self.project.get_openai_client()
        logger.debug("foundry_project_client_created", endpoint=self.endpoint)
    
    def _require_openai_client(self) -> Any:
        if self.openai_client is None:
            raise RuntimeError("AzureFoundryClient.connect() must be called first")
        return self.openai_client
    
    async def create_conversation(self) -> str:
        conversation = await self._require_openai_client().conversations.create(items=[])
        return conversation.id
    
    async def append_user_message(self, conversation_id: str, content: str) -> None:
        await self._require_openai_client().conversations.items.create(
            conversation_id,
            items=[{"type": "message", "role": "user", "content": content}]
        )
    
    async def generate_response(self, conversation_id: str, agent_name: str) -> Optional[str]:
        response = await self._require_openai_client().responses.create(
            conversation=conversation_id,
            extra_body={"agent": {"name": agent_name, "type": AGENT_REFERENCE_TYPE}}
        )
        return getattr(response, "output_text", None) or None
