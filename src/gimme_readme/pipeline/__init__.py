"""Pipeline stages: classify, assemble, dispatch, route."""

from .model_dispatcher import ModelDispatcher, dispatch
from .path_filter import PathFilter, classify
from .prompt_assembler import PromptAssembler, assemble
from .result_router import ResultRouter, route

__all__ = [
    "PathFilter",
    "PromptAssembler",
    "ModelDispatcher",
    "ResultRouter",
    "classify",
    "assemble",
    "dispatch",
    "route",
]
