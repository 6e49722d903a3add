"""Conversation state for follow-up chat about one scanned product."""

from collections.abc import Iterable

from nutriscan_api.models.chat import ConversationTurn, Role
from nutriscan_api.models.profile import HealthProfileSummary


class ConversationContext:
    """
    History, profile snapshot and product analysis for one chat session.

    The full history is kept in insertion order; prompts only ever see a
    suffix of it (see `window`). Turns are appended, never reordered or
    removed.
    """

    def __init__(
        self,
        session_id: str,
        product_analysis: str = "",
        profile: HealthProfileSummary | None = None,
        turns: Iterable[ConversationTurn] = (),
    ):
        self.session_id = session_id
        self.product_analysis = product_analysis
        self.profile = profile or HealthProfileSummary.empty()
        self._turns: list[ConversationTurn] = list(turns)

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def append(self, role: Role, text: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, text=text)
        self._turns.append(turn)
        return turn

    def window(self, size: int) -> list[ConversationTurn]:
        """The last `size` turns in original order (all of them if fewer)."""
        if size <= 0:
            return []
        return self._turns[-size:]
