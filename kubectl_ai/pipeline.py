"""
Prompt-to-apply pipeline.

One run moves through:

    START -> BACKEND_READY -> COMPLETION_RECEIVED -> CONFIRMED | REJECTED
          -> APPLIED | SKIPPED -> DONE

and ends in ABORTED as soon as any step raises. There are no retries: the
first error ends the run and at most one apply is attempted.
"""

import asyncio
import signal
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from rich.console import Console

from kubectl_ai.config import Config
from kubectl_ai.console import get_console
from kubectl_ai.kubernetes import KubectlApplier
from kubectl_ai.llm import CompletionClient, PromptRequest, complete
from kubectl_ai.ui import Selector, confirm_apply
from kubectl_ai.utils.logging import get_logger

logger = get_logger(__name__)

# Model and kubectl output is printed exactly as received
VERBATIM = {"markup": False, "emoji": False, "highlight": False, "soft_wrap": True}


class RunState(str, Enum):
    """States of a pipeline run."""
    START = "start"
    BACKEND_READY = "backend_ready"
    COMPLETION_RECEIVED = "completion_received"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    APPLIED = "applied"
    SKIPPED = "skipped"
    DONE = "done"
    ABORTED = "aborted"


class RunOutcome(str, Enum):
    """Result of a run that completed without error."""
    APPLIED = "applied"
    SKIPPED = "skipped"


@contextmanager
def interrupt_sets(event: asyncio.Event, loop: asyncio.AbstractEventLoop) -> Iterator[None]:
    """Set ``event`` on SIGINT while the block runs, then restore the old handler."""
    previous = signal.getsignal(signal.SIGINT)
    try:
        loop.add_signal_handler(signal.SIGINT, event.set)
        installed = "loop"
    except NotImplementedError:
        # Windows event loops
        signal.signal(
            signal.SIGINT, lambda signum, frame: loop.call_soon_threadsafe(event.set)
        )
        installed = "signal"
    except RuntimeError:
        # Signals can only be handled in the main thread
        installed = None

    try:
        yield
    finally:
        if installed == "loop":
            loop.remove_signal_handler(signal.SIGINT)
        if installed and previous is not None:
            signal.signal(signal.SIGINT, previous)


class Pipeline:
    """Runs one prompt through completion, confirmation and apply."""

    def __init__(
        self,
        config: Config,
        client: CompletionClient,
        selector: Selector,
        applier: KubectlApplier,
        console: Optional[Console] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Loaded configuration
            client: Completion client chosen by build_completion_client
            selector: Prompt used by the confirmation step
            applier: Applies the confirmed manifest
            console: Rich console for user-facing output
        """
        self.config = config
        self.client = client
        self.selector = selector
        self.applier = applier
        self.console = console or get_console()
        self.state = RunState.START

    def _transition(self, state: RunState) -> None:
        logger.debug("pipeline.transition", from_state=self.state.value, to_state=state.value)
        self.state = state

    async def generate(
        self,
        request: PromptRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Run the completion step; SIGINT cancels it while it is in flight."""
        if cancel_event is None:
            cancel_event = asyncio.Event()
        with interrupt_sets(cancel_event, asyncio.get_running_loop()):
            return await complete(
                self.client,
                request,
                deployment_name=self.config.openai_deployment_name,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                cancel_event=cancel_event,
            )

    def run(self, request: PromptRequest) -> RunOutcome:
        """
        Execute the whole pipeline for one prompt.

        Args:
            request: Prompt built from the command line

        Returns:
            RunOutcome.APPLIED or RunOutcome.SKIPPED

        Raises:
            KubectlAIError: Any step failure; the run is aborted
        """
        self._transition(RunState.BACKEND_READY)
        try:
            completion = asyncio.run(self.generate(request))
            self._transition(RunState.COMPLETION_RECEIVED)

            self.console.print(
                f"✨ Attempting to apply the following manifest: {completion}",
                **VERBATIM,
            )

            if not confirm_apply(self.config.require_confirmation, self.selector):
                self._transition(RunState.REJECTED)
                self._transition(RunState.SKIPPED)
                self._transition(RunState.DONE)
                return RunOutcome.SKIPPED

            self._transition(RunState.CONFIRMED)
            output = self.applier.apply(completion)
            if output:
                self.console.print(output, **VERBATIM)
            self._transition(RunState.APPLIED)
        except BaseException:
            self._transition(RunState.ABORTED)
            raise

        self._transition(RunState.DONE)
        return RunOutcome.APPLIED
