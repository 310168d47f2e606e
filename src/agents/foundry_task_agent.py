"""
Foundry Task Agent - Relay chat messages to Azure AI Foundry Agent Service

Forwards user messages to a hosted agent and returns its reply as a
ChatMessage. The agent itself (reasoning, conversation storage, retries)
lives in the Foundry project and is opaque here.

Key Features:
- Lazy initialization on first message (client + conversation)
- At most one setup per instance, shared by concurrent callers
- One server-side conversation per agent instance
- Never raises: every failure becomes an assistant fallback message

Error Handling:
- Missing config: warning logged, configuration message on every call
- Setup failure: error logged, same message as missing config
- Relay failure: error logged, generic error message for that call only
- Empty response: "couldn't generate a response" message
"""

import asyncio
from typing import Any, Callable, Optional
import structlog

from src.agents.config import FoundryConfig
from src.agents.models import (
    AgentState,
    ChatMessage,
    CONFIG_ERROR_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    NO_RESPONSE_MESSAGE,
)
from src.agents.service_client import AzureFoundryClient, ConversationServiceClient

logger = structlog.get_logger()

ClientFactory = Callable[[FoundryConfig], ConversationServiceClient]


def _default_client_factory(config: FoundryConfig) -> ConversationServiceClient:
    return AzureFoundryClient(config.project_endpoint)


class FoundryTaskAgent:
    """
    Session adapter for a Foundry-hosted agent.

    Lifecycle:
        UNINITIALIZED -> INITIALIZING -> READY
                                      -> FAILED (terminal, never retried)

    Example:
        agent = FoundryTaskAgent(task_service, config=FoundryConfig.from_env())

        reply = await agent.process_message("What's on my list today?")
        print(reply.content)

        await agent.cleanup()
    """

    def __init__(
        self,
        task_service: Any,
        config: Optional[FoundryConfig] = None,
        client_factory: Optional[ClientFactory] = None
    ):
        """
        Initialize agent. No network calls happen until the first message.

        Args:
            task_service: Hosting application's task service
            config: Foundry settings (default: read from environment)
            client_factory: Builds the service client from config
                           (default: AzureFoundryClient)
        """
        self.task_service = task_service
        self.config = config if config is not None else FoundryConfig.from_env()
        self._client_factory = client_factory or _default_client_factory

        self.client: Optional[ConversationServiceClient] = None
        self.agent_name: Optional[str] = None
        self.conversation_id: Optional[str] = None
        self.state = AgentState.UNINITIALIZED
        self._init_task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        """Ready only when every session field is populated."""
        return (
            self.state is AgentState.READY
            and self.client is not None
            and self.agent_name is not None
            and self.conversation_id is not None
        )

    async def _ensure_initialized(self) -> bool:
        """Run setup at most once; concurrent callers share the same task."""
        if self.is_ready:
            return True
        if self.state is AgentState.FAILED:
            return False

        if self._init_task is None:
            self.state = AgentState.INITIALIZING
            self._init_task = asyncio.ensure_future(self._initialize())

        task = self._init_task
        try:
            # Shielded so one cancelled caller doesn't abort the shared setup
            await asyncio.shield(task)
        finally:
            if task.done() and self._init_task is task:
                self._init_task = None

        return self.is_ready

    async def _initialize(self) -> None:
        """Create the client and a fresh conversation for this session."""
        if not self.config.is_complete:
            logger.warning(
                "foundry_agent_config_missing",
                missing=self.config.missing_settings()
            )
            self.state = AgentState.FAILED
            return

        try:
            self.client = self._client_factory(self.config)
            await self.client.connect()
            self.agent_name = self.config.agent_name
            self.conversation_id = await self.client.create_conversation()
            self.state = AgentState.READY

            logger.info(
                "foundry_agent_initialized",
                agent_name=self.agent_name,
                conversation_id=self.conversation_id
            )
        except Exception as e:
            logger.error(
                "foundry_agent_initialization_failed",
                error=str(e),
                exc_info=True
            )
            self.state = AgentState.FAILED

    async def process_message(self, message: str) -> ChatMessage:
        """
        Send a user message to the Foundry agent and return its reply.

        Steps:
        1. Ensure the session is initialized (lazy)
        2. Append the message to the conversation
        3. Generate a response with the configured agent

        Args:
            message: User's message (passed through unvalidated)

        Returns:
            Assistant ChatMessage; fallback text on any failure
        """
        initialized = await self._ensure_initialized()
        if not initialized:
            return ChatMessage.assistant(CONFIG_ERROR_MESSAGE)

        try:
            await self.client.append_user_message(self.conversation_id, message)
            output_text = await self.client.generate_response(
                self.conversation_id,
                self.agent_name
            )
        except Exception as e:
            logger.error(
                "foundry_agent_message_failed",
                conversation_id=self.conversation_id,
                message_length=len(message),
                error=str(e),
                exc_info=True
            )
            return ChatMessage.assistant(GENERIC_ERROR_MESSAGE)

        if not output_text:
            logger.warning(
                "foundry_agent_empty_response",
                conversation_id=self.conversation_id
            )
            return ChatMessage.assistant(NO_RESPONSE_MESSAGE)

        return ChatMessage.assistant(output_text)

    async def cleanup(self) -> None:
        # Agents and conversations are managed in the Foundry portal
        logger.info("foundry_agent_cleanup_completed")
