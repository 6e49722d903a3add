"""
Request payload composition for the Gemini generateContent endpoint.

Two modes:
- analysis: one user turn holding the instructions and the label image
- chat: instructions as a synthetic opening exchange, then the most
  recent history turns, then the new user message
"""

import logging
from typing import Any

from nutriscan_api.core.config import GenerationParams, Settings
from nutriscan_api.models.profile import HealthProfileSummary
from nutriscan_api.prompts import (
    ASSISTANT_ACKNOWLEDGEMENT,
    CHAT_SYSTEM_PROMPT,
    GENERIC_ANALYSIS_PROMPT,
    NO_PROFILE_NOTICE,
    OUT_OF_SCOPE_REFUSAL,
    PERSONALIZED_ANALYSIS_PROMPT,
    PROFILE_SECTION,
    SYSTEM_INSTRUCTION_PREFIX,
)

from .conversation import ConversationContext

logger = logging.getLogger(__name__)

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

# Conversation role -> provider role
PROVIDER_ROLES = {"user": "user", "assistant": "model"}


def _text_turn(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


class PromptComposer:
    """Builds deterministic request bodies from profile, history and input."""

    def __init__(
        self,
        analysis_params: GenerationParams,
        chat_params: GenerationParams,
        history_window: int = 10,
        safety_threshold: str = "BLOCK_NONE",
    ):
        """
        Initialize the composer.

        Args:
            analysis_params: Sampling parameters for label analysis
            chat_params: Sampling parameters for follow-up chat
            history_window: Number of most recent turns replayed in chat
            safety_threshold: Threshold applied to every harm category
        """
        self.analysis_params = analysis_params
        self.chat_params = chat_params
        self.history_window = history_window
        self.safety_threshold = safety_threshold

    @classmethod
    def from_settings(cls, settings: Settings) -> "PromptComposer":
        return cls(
            analysis_params=settings.analysis_generation,
            chat_params=settings.chat_generation,
            history_window=settings.chat_history_window,
            safety_threshold=settings.safety_threshold,
        )

    def safety_settings(self) -> list[dict[str, str]]:
        return [
            {"category": category, "threshold": self.safety_threshold}
            for category in HARM_CATEGORIES
        ]

    # =========================================================================
    # Analysis
    # =========================================================================

    def analysis_instructions(self, profile: HealthProfileSummary) -> str:
        """Pick the template variant by whether the profile is empty."""
        if profile.is_empty:
            return GENERIC_ANALYSIS_PROMPT
        return PERSONALIZED_ANALYSIS_PROMPT.format(health_profile=profile.to_text())

    def analysis_payload(
        self,
        image_base64: str,
        profile: HealthProfileSummary,
        mime_type: str = "image/jpeg",
    ) -> dict[str, Any]:
        """
        Build the body for a first-scan analysis.

        Args:
            image_base64: Label image, base64 encoded
            profile: Health profile snapshot for this run
            mime_type: Image MIME type

        Returns:
            generateContent request body
        """
        instructions = self.analysis_instructions(profile)
        logger.debug(
            f"Analysis prompt: {len(instructions)} chars, "
            f"personalized={not profile.is_empty}"
        )
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": instructions},
                        {"inline_data": {"mime_type": mime_type, "data": image_base64}},
                    ],
                }
            ],
            "generationConfig": self.analysis_params.to_payload(),
            "safetySettings": self.safety_settings(),
        }

    # =========================================================================
    # Chat
    # =========================================================================

    def chat_instructions(
        self,
        profile: HealthProfileSummary,
        product_analysis: str,
    ) -> str:
        if profile.is_empty:
            profile_section = NO_PROFILE_NOTICE
        else:
            profile_section = PROFILE_SECTION.format(health_profile=profile.to_text())
        return CHAT_SYSTEM_PROMPT.format(
            profile_section=profile_section,
            product_analysis=product_analysis,
            refusal=OUT_OF_SCOPE_REFUSAL,
        )

    def chat_payload(
        self,
        context: ConversationContext,
        user_message: str,
    ) -> dict[str, Any]:
        """
        Build the body for a follow-up chat turn.

        `context` must not yet contain `user_message`; it is added here as
        the final turn.
        """
        instructions = self.chat_instructions(context.profile, context.product_analysis)
        history = context.window(self.history_window)

        contents = [
            _text_turn("user", SYSTEM_INSTRUCTION_PREFIX + instructions),
            _text_turn("model", ASSISTANT_ACKNOWLEDGEMENT),
        ]
        contents.extend(_text_turn(PROVIDER_ROLES[turn.role], turn.text) for turn in history)
        contents.append(_text_turn("user", user_message))

        logger.debug(f"Chat prompt: {len(history)} history turns of {len(context)}")
        return {
            "contents": contents,
            "generationConfig": self.chat_params.to_payload(),
            "safetySettings": self.safety_settings(),
        }
