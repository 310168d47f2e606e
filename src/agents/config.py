"""
Foundry Agent Service configuration.

Resolved once by the hosting application and handed to the agent, so the
adapter itself never reads the process environment.
"""

from dataclasses import dataclass
from typing import List, Optional
import os
from dotenv import load_dotenv

ENDPOINT_ENV_VAR = "AZURE_AI_FOUNDRY_PROJECT_ENDPOINT"
AGENT_NAME_ENV_VAR = "AZURE_AI_FOUNDRY_AGENT_NAME"


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class FoundryConfig:
    """
    Immutable Foundry configuration.
    
    Attributes:
        project_endpoint: Base URL of the Foundry project
        agent_name: Name of the agent definition to invoke
        
    Example:
        config = FoundryConfig(
            project_endpoint="https://my-resource.services.ai.azure.com/api/projects/my-project",
            agent_name="task-agent"
        )
    """
    project_endpoint: Optional[str] = None
    agent_name: Optional[str] = None
    
    def __post_init__(self):
        """Treat blank values as missing."""
        object.__setattr__(self, "project_endpoint", _normalize(self.project_endpoint))
        object.__setattr__(self, "agent_name", _normalize(self.agent_name))
    
    @classmethod
    def from_env(cls) -> "FoundryConfig":
        """Build config from environment variables (loads .env if present)."""
        load_dotenv()
        return cls(
            project_endpoint=os.getenv(ENDPOINT_ENV_VAR),
            agent_name=os.getenv(AGENT_NAME_ENV_VAR)
        )
    
    @property
    def is_complete(self) -> bool:
        return self.project_endpoint is not None and self.agent_name is not None
    
    def missing_settings(self) -> List[str]:
        """Names of the environment variables that still need to be set."""
        missing = []
        if self.project_endpoint is None:
            missing.append(ENDPOINT_ENV_VAR)
        if self.agent_name is None:
            missing.append(AGENT_NAME_ENV_VAR)
        return missing
