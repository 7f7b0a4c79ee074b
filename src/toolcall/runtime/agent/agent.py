"""Function-calling agent: request -> prompt -> model -> function call -> outcome.

The agent renders the prompt (tool docs, history, request), streams the model
reply through the generation engine, decodes it strictly as a
``FunctionCall`` and evaluates it through the registry.

Failures before invocation raise ``OrchestrationError`` with a ``stage``:
    template    the prompt template could not be filled
    generation  the backend failed or the session was cancelled
    decode      the reply is not a well-formed function call

Failures from lookup onwards (unknown function, bad arguments, domain errors,
faults) come back inside the ``InvocationOutcome``.

Example:
    >>> agent = Agent(calculator_registry(), GenerationEngine(OllamaBackend()))
    >>> outcome = await agent.execute("divide 4 and 3")
    >>> outcome.render()
    'Result: [1.3333333333333333]'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from toolcall.foundation.errors import ErrorCode, GenerationBackendError, OrchestrationError, ToolError
from toolcall.runtime.concurrency import run_sync
from toolcall.runtime.observability import get_logger

from .memory import Memory
from .prompt import DEFAULT_TEMPLATE, render_prompt

if TYPE_CHECKING:
    from string import Template

    from toolcall.foundation.core import InvocationOutcome
    from toolcall.foundation.registry import ToolRegistry
    from toolcall.runtime.generation import GenerationEngine

log = get_logger("toolcall.agent")

FragmentCallback = Callable[[str], None]


class FunctionCall(BaseModel):
    """The model's decision: which function to call and with what."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    function: Annotated[str, Field(min_length=1, description="Registered function name")]
    arguments: list[Any] = Field(default_factory=list, description="Positional arguments in declared order")

    @classmethod
    def decode(cls, reply: str | bytes) -> FunctionCall:
        """Strict JSON decode. Raises ``ValidationError`` on malformed or wrong-shaped input."""
        return cls.model_validate_json(reply)


class Agent:
    """Orchestrates one model round-trip per request.

    Args:
        registry: Tools offered to the model and used for evaluation
        engine: Streaming generation engine
        template: Prompt template (``$tools``, ``$history``, ``$request``)
        memory: Interaction history; a fresh one when omitted
        on_fragment: Called with each reply fragment as it arrives
    """

    def __init__(
        self,
        registry: ToolRegistry,
        engine: GenerationEngine,
        *,
        template: str | Template = DEFAULT_TEMPLATE,
        memory: Memory | None = None,
        on_fragment: FragmentCallback | None = None,
    ) -> None:
        self.registry = registry
        self.engine = engine
        self.template = template
        self.memory = memory if memory is not None else Memory()
        self.on_fragment = on_fragment

    def render_prompt(self, request: str) -> str:
        try:
            return render_prompt(
                self.template, tools=self.registry.describe(), request=request, history=self.memory.render()
            )
        except (KeyError, ValueError) as e:
            raise OrchestrationError.at("template", e, ErrorCode.TEMPLATE_ERROR) from e

    async def call_llm(self, request: str, *, key: str | None = None) -> FunctionCall:
        """Render, generate and decode. ``key`` lets another task ``engine.stop`` this request."""
        prompt = self.render_prompt(request)
        parts: list[str] = []
        async with self.engine.session(prompt, key=key) as stream:
            try:
                async for fragment in stream:
                    parts.append(fragment)
                    if self.on_fragment is not None:
                        self.on_fragment(fragment)
            except GenerationBackendError as e:
                raise OrchestrationError.at("generation", e, ErrorCode.GENERATION_BACKEND) from e
            if stream.cancelled:
                raise OrchestrationError(
                    ToolError.create("agent", f"generation cancelled for session {stream.key!r}", ErrorCode.GENERATION_BACKEND),
                    "generation",
                )

        reply = "".join(parts)
        log.debug("model replied", chars=len(reply))
        try:
            return FunctionCall.decode(reply)
        except ValidationError as e:
            log.warning("undecodable model reply", reply=reply[:200])
            raise OrchestrationError.at("decode", e, ErrorCode.PARSE_ERROR) from e

    async def execute(self, request: str, *, key: str | None = None) -> InvocationOutcome:
        """Run one request end to end and record the exchange in memory."""
        call = await self.call_llm(request, key=key)
        log.info("function selected", function=call.function, arguments=call.arguments)
        outcome = self.registry.invoke(call.function, call.arguments)
        self.memory.append(request, outcome.render())
        return outcome

    def execute_sync(self, request: str) -> InvocationOutcome:
        """Blocking ``execute`` for scripts and the CLI."""
        return run_sync(self.execute(request))
