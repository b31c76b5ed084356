"""Model dispatch stage of the pipeline.

Issues exactly one inference request per invocation. There is no retry and
no caching: a failure is reported upward as a `ModelInvocationError`
carrying the original exception.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from gimme_readme.core.types import (
    AssembledCommand,
    DispatchConfig,
    DispatchedCommand,
    Failure,
    ModelResponse,
    Result,
    Success,
)
from gimme_readme.exceptions import ModelInvocationError
from gimme_readme.pipeline.adapters import GenerationAdapter, GoogleGenAIAdapter
from gimme_readme.pipeline.base import BaseAsyncHandler

logger = logging.getLogger(__name__)

type AdapterFactory = Callable[[str], GenerationAdapter]


def _default_adapter_factory(api_key: str) -> GenerationAdapter:
    return GoogleGenAIAdapter(api_key)


async def dispatch(
    prompt: str,
    config: DispatchConfig,
    adapter: GenerationAdapter,
) -> Result[ModelResponse, ModelInvocationError]:
    """Send ``prompt`` once and wrap the outcome."""
    try:
        response = await adapter.infer_text(prompt, config)
    except Exception as e:
        logger.debug("Inference call to %s failed", config.model, exc_info=True)
        return Failure(
            ModelInvocationError(
                f"Failed to receive a response from the {config.model} model: {e}",
                model=config.model,
                cause=e,
            )
        )
    if not isinstance(response, ModelResponse):
        return Failure(
            ModelInvocationError(
                f"Adapter returned {type(response).__name__}, expected ModelResponse",
                model=config.model,
            )
        )
    if not config.wants_usage_metrics and response.usage is not None:
        response = ModelResponse(text=response.text)
    return Success(response)


class ModelDispatcher(
    BaseAsyncHandler[AssembledCommand, DispatchedCommand, ModelInvocationError]
):
    """Executes the single inference call for an assembled prompt.

    Uses an injected adapter when given; otherwise builds one from
    ``adapter_factory`` and ``api_key`` at dispatch time.
    """

    def __init__(
        self,
        adapter: GenerationAdapter | None = None,
        *,
        api_key: str | None = None,
        adapter_factory: AdapterFactory = _default_adapter_factory,
    ) -> None:
        """Initialize with an adapter or the means to build one."""
        self._adapter = adapter
        self._api_key = api_key
        self._adapter_factory = adapter_factory

    def _select_adapter(self, config: DispatchConfig) -> GenerationAdapter:
        if self._adapter is not None:
            return self._adapter
        if not self._api_key:
            raise ModelInvocationError(
                "No Gemini API key configured. Set GEMINI_API_KEY in the environment "
                "or in ~/.gimme_readme_config.",
                model=config.model,
            )
        try:
            return self._adapter_factory(self._api_key)
        except Exception as e:
            raise ModelInvocationError(
                f"Failed to initialize the model client: {e}",
                model=config.model,
                cause=e,
            ) from e

    async def handle(
        self, command: AssembledCommand
    ) -> Result[DispatchedCommand, ModelInvocationError]:
        """Dispatch the assembled prompt."""
        config = command.initial.config
        try:
            adapter = self._select_adapter(config)
        except ModelInvocationError as e:
            return Failure(e)
        result = await dispatch(command.prompt, config, adapter)
        if isinstance(result, Failure):
            return result
        return Success(DispatchedCommand(assembled=command, response=result.value))
