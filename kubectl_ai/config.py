"""
Configuration management for kubectl-ai.

Implements multi-level configuration loading with precedence:
1. Command-line flags (highest priority)
2. Environment variables (OPENAI_API_KEY, AZURE_OPENAI_ENDPOINT, ...)
3. .env files (./.env, ~/.kubectl-ai/.env)
4. Project config (./.kubectl-ai/config.yaml)
5. User config (~/.kubectl-ai/config.yaml)
6. System config (/etc/kubectl-ai/config.yaml)
"""

from typing import Any, Tuple

import yaml
from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource, PydanticBaseSettingsSource

from kubectl_ai.errors import ConfigurationError

DEFAULT_DEPLOYMENT_NAME = "text-davinci-003"
DEFAULT_AZURE_API_VERSION = "2024-02-15-preview"
MISSING_API_KEY_MESSAGE = "Please provide an OpenAI key."


class Config(BaseSettings):
    """Immutable configuration for a kubectl-ai run."""

    model_config = SettingsConfigDict(
        env_file=[
            "~/.kubectl-ai/.env",  # User-specific
            ".env",  # Project-specific
        ],
        yaml_file=[
            "/etc/kubectl-ai/config.yaml",  # System-wide
            "~/.kubectl-ai/config.yaml",  # User-specific
            ".kubectl-ai/config.yaml",  # Project-specific
        ],
        # Variables keep the names the tool has always used (OPENAI_API_KEY, ...)
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
        frozen=True,
    )

    # =================================================================
    # Completion backend
    # =================================================================

    openai_deployment_name: str = Field(
        default=DEFAULT_DEPLOYMENT_NAME,
        description="The deployment name used for the model in OpenAI service.",
    )
    openai_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="The API key for the OpenAI service. This is required.",
    )
    azure_openai_endpoint: str = Field(
        default="",
        description=(
            "The endpoint for Azure OpenAI service. If provided, Azure OpenAI "
            "service will be used instead of OpenAI service."
        ),
    )
    azure_openai_api_version: str = Field(
        default=DEFAULT_AZURE_API_VERSION,
        description="API version sent to the Azure OpenAI endpoint.",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description=(
            "The temperature to use for the model. Set closer to 0 for more "
            "deterministic but less creative output."
        ),
    )
    max_tokens: int = Field(
        default=3000, ge=1, description="Maximum number of tokens to generate"
    )
    openai_request_timeout: float = Field(
        default=600.0, gt=0, description="Timeout for the completion request in seconds"
    )

    # =================================================================
    # UI
    # =================================================================

    require_confirmation: bool = Field(
        default=True,
        description="Whether to require confirmation before applying the manifest.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML support."""
        yaml_settings = YamlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    @property
    def use_azure(self) -> bool:
        """True when the alternate (Azure OpenAI) endpoint is configured."""
        return bool(self.azure_openai_endpoint.strip())

    def api_key(self) -> str:
        """Return the API key in plain text."""
        return self.openai_api_key.get_secret_value()


def load_config(**overrides: Any) -> Config:
    """
    Load configuration from all sources with proper precedence.

    Keyword arguments are command-line overrides; ``None`` values mean the
    flag was not given and are dropped so lower-precedence sources apply.

    Returns:
        Config: The loaded and validated configuration

    Raises:
        ConfigurationError: If a value fails validation, a config file
            cannot be read or parsed, or the API key is empty

    Examples:
        >>> config = load_config(openai_api_key="sk-...")
        >>> config.openai_deployment_name
        'text-davinci-003'

        # export AZURE_OPENAI_ENDPOINT=https://my-resource.openai.azure.com/
        >>> load_config().use_azure
        True
    """
    init_kwargs = {key: value for key, value in overrides.items() if value is not None}
    try:
        config = Config(**init_kwargs)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid configuration file: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file: {e}") from e

    if not config.api_key().strip():
        raise ConfigurationError(MISSING_API_KEY_MESSAGE)

    return config
