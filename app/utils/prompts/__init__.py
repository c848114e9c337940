"""Prompt construction for content generation."""

from app.utils.prompts.prompt_manager import (
    Prompt,
    PromptManager,
    RequestType,
    build_prompt,
    prompt_manager,
    register_request_type,
)
from app.utils.prompts.templates import (
    ASSET_CATEGORY_SYSTEM_PROMPT,
    ASSET_DESCRIPTION_SYSTEM_PROMPT,
)

__all__ = [
    "Prompt",
    "PromptManager",
    "RequestType",
    "build_prompt",
    "prompt_manager",
    "register_request_type",
    "ASSET_CATEGORY_SYSTEM_PROMPT",
    "ASSET_DESCRIPTION_SYSTEM_PROMPT",
]
