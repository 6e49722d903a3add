"""Prompt templates for label analysis and follow-up chat."""

from .analysis import (
    ANALYSIS_SECTIONS,
    CONCLUSION_HEADER,
    GENERIC_ANALYSIS_PROMPT,
    PERSONALIZED_ANALYSIS_PROMPT,
    PRODUCT_NAME_HEADER,
    PROFILE_NUDGE,
)
from .chat import (
    ASSISTANT_ACKNOWLEDGEMENT,
    CHAT_SYSTEM_PROMPT,
    NO_PROFILE_NOTICE,
    OUT_OF_SCOPE_REFUSAL,
    PROFILE_SECTION,
    SYSTEM_INSTRUCTION_PREFIX,
)

__all__ = [
    "ANALYSIS_SECTIONS",
    "ASSISTANT_ACKNOWLEDGEMENT",
    "CHAT_SYSTEM_PROMPT",
    "CONCLUSION_HEADER",
    "GENERIC_ANALYSIS_PROMPT",
    "NO_PROFILE_NOTICE",
    "OUT_OF_SCOPE_REFUSAL",
    "PERSONALIZED_ANALYSIS_PROMPT",
    "PRODUCT_NAME_HEADER",
    "PROFILE_NUDGE",
    "PROFILE_SECTION",
    "SYSTEM_INSTRUCTION_PREFIX",
]
