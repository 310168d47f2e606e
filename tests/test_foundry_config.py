"""
Tests for FoundryConfig
"""

import pytest
from unittest.mock import patch

from src.agents import FoundryConfig


class TestFoundryConfig:

    def test_complete_config(self):
        config = FoundryConfig(project_endpoint="https://example/api/projects/p", agent_name="agent")
        assert config.is_complete
        assert config.missing_settings() == []

    def test_empty_config_reports_both_settings(self):
        config = FoundryConfig()
        assert not config.is_complete
        assert config.missing_settings() == [
            "AZURE_AI_FOUNDRY_PROJECT_ENDPOINT",
            "AZURE_AI_FOUNDRY_AGENT_NAME"
        ]

    def test_blank_values_count_as_missing(self):
        config = FoundryConfig(project_endpoint="   ", agent_name="")
        assert config.project_endpoint is None
        assert config.agent_name is None
        assert not config.is_complete

    def test_values_are_stripped(self):
        config = FoundryConfig(project_endpoint=" https://example ", agent_name=" agent\n")
        assert config.project_endpoint == "https://example"
        assert config.agent_name == "agent"

    def test_config_is_immutable(self):
        config = FoundryConfig(agent_name="agent")
        with pytest.raises(AttributeError):
            config.agent_name = "other"

    def test_from_env(self):
        env = {
            "AZURE_AI_FOUNDRY_PROJECT_ENDPOINT": "https://env.example/api/projects/p",
            "AZURE_AI_FOUNDRY_AGENT_NAME": "env-agent"
        }
        with patch("src.agents.config.load_dotenv") as mock_load:
            with patch.dict("os.environ", env, clear=True):
                config = FoundryConfig.from_env()

        mock_load.assert_called_once()
        assert config == FoundryConfig(
            project_endpoint="https://env.example/api/projects/p",
            agent_name="env-agent"
        )

    def test_from_env_missing(self):
        with patch("src.agents.config.load_dotenv"):
            with patch.dict("os.environ", {}, clear=True):
                config = FoundryConfig.from_env()

        assert not config.is_complete
