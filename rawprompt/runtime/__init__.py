"""Prompt loop orchestration and persisted engine defaults."""

from __future__ import annotations

from .config import EngineConfig, load_engine_config, save_engine_config
from .loop import EndBehavior, PromptLoop, PromptResult, to_prompt_result

__all__ = [
    "EndBehavior",
    "EngineConfig",
    "PromptLoop",
    "PromptResult",
    "load_engine_config",
    "save_engine_config",
    "to_prompt_result",
]
