"""Provider adapters for the model dispatch stage."""

from .base import GenerationAdapter
from .gemini import GoogleGenAIAdapter, extract_usage_metrics

__all__ = ["GenerationAdapter", "GoogleGenAIAdapter", "extract_usage_metrics"]
