"""
Prompt construction and cancellable completion calls.
"""

import asyncio
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from kubectl_ai.errors import BackendError, CancellationError
from kubectl_ai.llm.provider import CompletionClient
from kubectl_ai.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PromptRequest:
    """Natural-language instruction built from command-line words.

    Attributes:
        args: Positional arguments in the order they were given
    """
    args: Tuple[str, ...]

    @classmethod
    def from_args(cls, args: Iterable[str]) -> "PromptRequest":
        """Build a request from positional arguments.

        Raises:
            ValueError: If no arguments were given
        """
        words = tuple(args)
        if not words:
            raise ValueError("prompt must be provided")
        return cls(args=words)

    @property
    def text(self) -> str:
        """The arguments joined with single spaces."""
        return " ".join(self.args)


async def complete(
    client: CompletionClient,
    request: PromptRequest,
    deployment_name: str,
    temperature: float = 0.0,
    max_tokens: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> str:
    """Send the prompt to the backend and return the first generated choice.

    The request races ``cancel_event``: if the event is set before the backend
    answers, the in-flight request is cancelled and ``CancellationError`` is
    raised.

    Args:
        client: Selected completion client
        request: Prompt to send
        deployment_name: Model or Azure deployment name
        temperature: Sampling temperature
        max_tokens: Maximum tokens to generate
        cancel_event: Event set when the user interrupts the run

    Returns:
        Text of the first choice

    Raises:
        BackendError: On API/transport errors or when no choices are returned
        CancellationError: If cancel_event fires first
    """
    logger.debug(
        "completion.request",
        backend=client.name,
        model=deployment_name,
        temperature=temperature,
        prompt=request.text,
    )
    call = asyncio.ensure_future(
        client.create_completion(
            request.text,
            model=deployment_name,
            temperature=temperature,
            max_tokens=max_tokens,
            n=1,
        )
    )

    if cancel_event is None:
        response = await call
    else:
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({call, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            call.cancel()
            raise
        finally:
            waiter.cancel()

        if not call.done():
            call.cancel()
            await asyncio.gather(call, return_exceptions=True)
            raise CancellationError("completion request cancelled")
        response = call.result()

    if not response.choices:
        raise BackendError(f"{client.name} returned no choices for the prompt")

    logger.debug("completion.response", backend=client.name, usage=response.usage)
    return response.choices[0]
