"""Tests for configuration loading and client creation."""

from __future__ import annotations

import pytest

from lightchat.config import ChatConfig, create_client, load_config
from lightchat.exceptions import ConfigError, LightChatError
from lightchat.llm import AzureOpenAIClient, OpenAIClient


@pytest.fixture
def azure_env(clean_env, tmp_path):
    """Minimal valid Azure settings in the environment, run from an empty dir."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://res.openai.azure.com")
    clean_env.setenv("AZURE_OPENAI_API_KEY", "secret")
    return clean_env


class TestLoadConfigFromEnvironment:
    def test_defaults(self, azure_env):
        config = load_config()
        assert config.endpoint == "https://res.openai.azure.com"
        assert config.api_key == "secret"
        assert config.model_id == "gpt-5-mini"
        assert config.provider == "azure"
        assert config.auto_invoke_tools is True
        assert config.max_tool_rounds == 8
        assert config.request_timeout == 60.0
        assert config.max_retries == 3
        assert config.system_prompt is None
        assert config.log_level == "WARNING"

    def test_all_variables(self, azure_env):
        azure_env.setenv("AZURE_OPENAI_MODEL_ID", "my-deployment")
        azure_env.setenv("AZURE_OPENAI_API_VERSION", "2024-10-21")
        azure_env.setenv("LIGHTCHAT_PROVIDER", "OpenAI")
        azure_env.setenv("LIGHTCHAT_AUTO_INVOKE_TOOLS", "false")
        azure_env.setenv("LIGHTCHAT_MAX_TOOL_ROUNDS", "4")
        azure_env.setenv("LIGHTCHAT_TIMEOUT", "12.5")
        azure_env.setenv("LIGHTCHAT_MAX_RETRIES", "5")
        azure_env.setenv("LIGHTCHAT_SYSTEM_PROMPT", "Be brief.")
        azure_env.setenv("LIGHTCHAT_LOG_LEVEL", "debug")

        config = load_config()
        assert config.model_id == "my-deployment"
        assert config.api_version == "2024-10-21"
        assert config.provider == "openai"
        assert config.auto_invoke_tools is False
        assert config.max_tool_rounds == 4
        assert config.request_timeout == 12.5
        assert config.max_retries == 5
        assert config.system_prompt == "Be brief."
        assert config.log_level == "DEBUG"

    def test_overrides_win(self, azure_env):
        azure_env.setenv("LIGHTCHAT_AUTO_INVOKE_TOOLS", "true")
        config = load_config(auto_invoke_tools=False, log_level=None)
        assert config.auto_invoke_tools is False
        assert config.log_level == "WARNING"

    def test_unknown_override(self, azure_env):
        with pytest.raises(ConfigError, match="Unknown configuration field"):
            load_config(colour="blue")


class TestMissingConfiguration:
    def test_missing_endpoint(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        clean_env.setenv("AZURE_OPENAI_API_KEY", "secret")
        with pytest.raises(ConfigError, match="AZURE_OPENAI_ENDPOINT"):
            load_config()

    def test_missing_api_key(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        clean_env.setenv("AZURE_OPENAI_ENDPOINT", "https://res.openai.azure.com")
        with pytest.raises(ConfigError, match="AZURE_OPENAI_API_KEY"):
            load_config()

    def test_blank_api_key(self, azure_env):
        azure_env.setenv("AZURE_OPENAI_API_KEY", "   ")
        with pytest.raises(ConfigError, match="AZURE_OPENAI_API_KEY"):
            load_config()

    def test_config_error_is_lightchat_error(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        with pytest.raises(LightChatError):
            load_config()

    @pytest.mark.parametrize(
        "name,value",
        [
            ("LIGHTCHAT_MAX_TOOL_ROUNDS", "0"),
            ("LIGHTCHAT_TIMEOUT", "-1"),
            ("LIGHTCHAT_PROVIDER", "bedrock"),
            ("LIGHTCHAT_LOG_LEVEL", "LOUD"),
            ("LIGHTCHAT_AUTO_INVOKE_TOOLS", "maybe"),
        ],
    )
    def test_invalid_values(self, azure_env, name, value):
        azure_env.setenv(name, value)
        with pytest.raises(ConfigError, match=name):
            load_config()


class TestEnvFile:
    def test_explicit_env_file(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        env_file = tmp_path / "lights.env"
        env_file.write_text(
            "AZURE_OPENAI_ENDPOINT=https://file.openai.azure.com\n"
            "AZURE_OPENAI_API_KEY=from-file\n"
            "AZURE_OPENAI_MODEL_ID=file-model\n"
        )
        config = load_config(env_file)
        assert config.endpoint == "https://file.openai.azure.com"
        assert config.model_id == "file-model"

    def test_env_file_found_in_parent_directory(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text(
            "AZURE_OPENAI_ENDPOINT=https://parent.openai.azure.com\n"
            "AZURE_OPENAI_API_KEY=parent\n"
        )
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        clean_env.chdir(child)
        assert load_config().endpoint == "https://parent.openai.azure.com"

    def test_environment_beats_env_file(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            "AZURE_OPENAI_ENDPOINT=https://file.openai.azure.com\n"
            "AZURE_OPENAI_API_KEY=from-file\n"
        )
        clean_env.setenv("AZURE_OPENAI_API_KEY", "from-env")
        assert load_config().api_key == "from-env"

    def test_missing_explicit_env_file(self, clean_env, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.env")


class TestCreateClient:
    def test_azure_client(self):
        config = ChatConfig(endpoint="https://res.openai.azure.com", api_key="k")
        client = create_client(config)
        assert isinstance(client, AzureOpenAIClient)
        assert client.default_model == "gpt-5-mini"
        client.close()

    def test_openai_client(self):
        config = ChatConfig(endpoint="https://api.example.com/v1", api_key="k", provider="openai")
        client = create_client(config)
        assert isinstance(client, OpenAIClient)
        assert not isinstance(client, AzureOpenAIClient)
        client.close()
