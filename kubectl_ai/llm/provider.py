"""
Completion client abstraction layer.

A ``CompletionClient`` sends one prompt to a text-completion model and returns
the generated choices. Two variants exist:

- ``OpenAICompletionClient`` talks to the public OpenAI endpoint.
- ``AzureOpenAICompletionClient`` talks to an Azure OpenAI resource, where the
  model is addressed by its deployment name.

``build_completion_client`` picks one of them once, from configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI

from kubectl_ai.config import Config
from kubectl_ai.errors import BackendConstructionError, BackendError
from kubectl_ai.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CompletionResponse:
    """Response from a completion backend.

    Attributes:
        choices: Generated texts, in the order the backend returned them
        model: The model that generated the response
        usage: Token usage information (prompt_tokens, completion_tokens, total_tokens)
    """
    choices: List[str]
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)


class CompletionClient(ABC):
    """Abstract base class for completion backends.

    Implementations must provide:
    - _create_client(): Build the SDK client for their endpoint
    """

    #: Short name used in logs and error messages
    name = "completion"

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        self.api_key = api_key
        self.timeout = timeout
        try:
            self._client = self._create_client()
        except (openai.OpenAIError, ValueError) as e:
            raise BackendConstructionError(f"Failed to create {self.name} client: {e}") from e

    @abstractmethod
    def _create_client(self) -> Any:
        """Build the underlying async SDK client."""

    @property
    def client(self) -> Any:
        """The underlying SDK client."""
        return self._client

    async def create_completion(
        self,
        prompt: str,
        model: str,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
        n: int = 1,
    ) -> CompletionResponse:
        """Request completions for a prompt.

        Args:
            prompt: Natural-language prompt
            model: Model name (OpenAI) or deployment name (Azure OpenAI)
            temperature: Sampling temperature (0.0 to 1.0)
            max_tokens: Maximum tokens to generate
            n: Number of choices to request

        Returns:
            CompletionResponse with the generated choices

        Raises:
            BackendError: For transport and API errors
        """
        request_params: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "temperature": temperature,
            "n": n,
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            response = await self._client.completions.create(**request_params)
        except openai.OpenAIError as e:
            raise BackendError(f"{self.name} API error: {e}") from e

        usage = {}
        if response.usage is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
        return CompletionResponse(
            choices=[choice.text for choice in (response.choices or [])],
            model=response.model or "",
            usage=usage,
        )


class OpenAICompletionClient(CompletionClient):
    """Direct OpenAI API client."""

    name = "OpenAI"

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)


class AzureOpenAICompletionClient(CompletionClient):
    """Azure OpenAI client; ``model`` is the deployment name."""

    name = "Azure OpenAI"

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        api_version: str,
        timeout: Optional[float] = None,
    ):
        """Initialize the Azure OpenAI client.

        Args:
            api_key: Azure OpenAI API key
            endpoint: Resource endpoint, e.g. https://my-resource.openai.azure.com/
            api_version: Azure OpenAI API version
            timeout: Request timeout in seconds

        Raises:
            BackendConstructionError: If the endpoint is not an absolute http(s) URL
                or the SDK refuses the configuration
        """
        _validate_endpoint(endpoint)
        self.endpoint = endpoint
        self.api_version = api_version
        super().__init__(api_key, timeout=timeout)

    def _create_client(self) -> AsyncAzureOpenAI:
        return AsyncAzureOpenAI(
            api_key=self.api_key,
            azure_endpoint=self.endpoint,
            api_version=self.api_version,
            timeout=self.timeout,
        )


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise BackendConstructionError(
            f"Invalid Azure OpenAI endpoint {endpoint!r}: expected an absolute http(s) URL"
        )


def build_completion_client(config: Config) -> CompletionClient:
    """Create the completion client selected by configuration.

    The Azure OpenAI client is used exclusively when an endpoint is configured;
    otherwise the direct OpenAI client is built.

    Args:
        config: Loaded configuration

    Returns:
        Configured CompletionClient

    Raises:
        BackendConstructionError: If the client cannot be constructed
    """
    if config.use_azure:
        logger.debug(
            "backend.selected",
            backend="azure",
            endpoint=config.azure_openai_endpoint,
            deployment=config.openai_deployment_name,
        )
        return AzureOpenAICompletionClient(
            api_key=config.api_key(),
            endpoint=config.azure_openai_endpoint.strip(),
            api_version=config.azure_openai_api_version,
            timeout=config.openai_request_timeout,
        )

    logger.debug("backend.selected", backend="openai", model=config.openai_deployment_name)
    return OpenAICompletionClient(
        api_key=config.api_key(),
        timeout=config.openai_request_timeout,
    )
