"""Chat service for follow-up questions about a scanned product."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from nutriscan_api.core.exceptions import ErrorKind, ModelFallbackError, NotFoundError, NutriScanError
from nutriscan_api.models.chat import ConversationTurn
from nutriscan_api.models.profile import HealthProfileSummary
from nutriscan_api.utils.dates import current_year

from .collaborators import ProfileSource, ScanPersistence
from .conversation import ConversationContext
from .gemini.client import ModelFallbackClient
from .prompt_composer import PromptComposer

logger = logging.getLogger(__name__)

ERROR_REPLY_PREFIX = "Maaf, terjadi kesalahan: "


@dataclass(frozen=True)
class ChatExchange:
    """The assistant side of one exchange."""

    turn: ConversationTurn
    message_id: str | None
    is_error: bool = False


class ChatService:
    """
    Service for follow-up chat on a scan session.

    Turns are appended to the in-memory context only once the step that
    produced them has finished: the user turn after it is persisted, the
    reply after the model call and its persistence. A failed model call
    still appends a synthetic assistant error turn so the conversation
    stays strictly alternating.

    The error turn is never stored. The HTTP layer rebuilds the context
    from storage on every request, so the error turn only reaches the
    caller in the response, and the next `load` ends with the unanswered
    question.
    """

    def __init__(
        self,
        persistence: ScanPersistence,
        profiles: ProfileSource,
        model_client: ModelFallbackClient,
        composer: PromptComposer,
        year_provider: Callable[[], int] = current_year,
    ):
        self.persistence = persistence
        self.profiles = profiles
        self.model_client = model_client
        self.composer = composer
        self._year_provider = year_provider

    async def load(self, session_id: str, user_id: str) -> ConversationContext:
        """
        Build the conversation context for a stored session.

        Raises:
            NotFoundError: If the session does not exist or belongs to
                another user
        """
        session = await self.persistence.get_session(session_id)
        if session is None or session.user_id != user_id:
            raise NotFoundError("Scan session", session_id)

        messages = await self.persistence.get_messages(session_id)

        try:
            record = await self.profiles.get_health_profile(user_id)
            profile = HealthProfileSummary.from_profile(record, self._year_provider())
        except Exception as e:
            logger.warning(f"Profile lookup failed for chat, continuing without: {e}")
            profile = HealthProfileSummary.empty()

        logger.info(f"Loaded session {session_id} with {len(messages)} messages")
        return ConversationContext(
            session_id=session_id,
            product_analysis=session.initial_analysis or "",
            profile=profile,
            turns=[m.to_turn() for m in messages],
        )

    async def send_message(self, context: ConversationContext, message: str) -> ChatExchange:
        """
        Run one exchange: persist the question, ask the model, persist the answer.

        Args:
            context: Loaded conversation; mutated in place
            message: The user's question

        Returns:
            ChatExchange with the reply (or the synthetic error turn)

        Raises:
            NutriScanError: UPSTREAM_DEPENDENCY_FAILURE if a message
                cannot be persisted
        """
        logger.info(f"Chat message for session {context.session_id}: {message[:50]}...")

        try:
            await self.persistence.persist_message(context.session_id, "user", message)
        except Exception as e:
            logger.exception("Persisting user message failed")
            raise NutriScanError(
                f"Gagal menyimpan pesan: {e}",
                kind=ErrorKind.UPSTREAM_DEPENDENCY_FAILURE,
                details={"step": "persist_user_message"},
            ) from e

        # Compose before appending so the question is only sent once
        payload = self.composer.chat_payload(context, message)
        context.append("user", message)

        try:
            generation = await self.model_client.generate(payload)
        except ModelFallbackError as e:
            logger.error(f"Chat reply failed ({e.kind.value}): {e.message}")
            turn = context.append("assistant", ERROR_REPLY_PREFIX + e.message)
            return ChatExchange(turn=turn, message_id=None, is_error=True)

        try:
            message_id = await self.persistence.persist_message(
                context.session_id, "assistant", generation.text
            )
        except Exception as e:
            logger.exception("Persisting assistant reply failed")
            raise NutriScanError(
                f"Gagal menyimpan balasan: {e}",
                kind=ErrorKind.UPSTREAM_DEPENDENCY_FAILURE,
                details={"step": "persist_assistant_message"},
            ) from e

        turn = context.append("assistant", generation.text)
        logger.info(f"Saved reply ({len(generation.text)} chars)")
        return ChatExchange(turn=turn, message_id=message_id)
