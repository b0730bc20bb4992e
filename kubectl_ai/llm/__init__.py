"""
Completion backend layer.

Selects the OpenAI or Azure OpenAI client and runs cancellable completions.
"""

from .provider import (
    CompletionResponse,
    CompletionClient,
    OpenAICompletionClient,
    AzureOpenAICompletionClient,
    build_completion_client,
)
from .completion import PromptRequest, complete

__all__ = [
    "CompletionResponse",
    "CompletionClient",
    "OpenAICompletionClient",
    "AzureOpenAICompletionClient",
    "build_completion_client",
    "PromptRequest",
    "complete",
]
