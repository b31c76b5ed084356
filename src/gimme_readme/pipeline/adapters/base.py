"""Adapter protocol between the dispatcher and a provider SDK."""

from typing import Protocol, runtime_checkable

from gimme_readme.core.types import DispatchConfig, ModelResponse


@runtime_checkable
class GenerationAdapter(Protocol):
    """Performs one text-generation request.

    Implementations raise on any transport or service failure; the
    dispatcher turns that into a `ModelInvocationError`.
    """

    async def infer_text(self, prompt: str, config: DispatchConfig) -> ModelResponse:
        """Send ``prompt`` to ``config.model`` and return the response text."""
        ...
