"""Tests for ConversationContext."""

import pytest

from nutriscan_api.models.chat import ConversationTurn
from nutriscan_api.models.profile import HealthProfileSummary
from nutriscan_api.services.conversation import ConversationContext


def _filled(count: int) -> ConversationContext:
    context = ConversationContext("s1")
    for i in range(count):
        context.append("user" if i % 2 == 0 else "assistant", str(i))
    return context


def test_defaults():
    context = ConversationContext("s1")

    assert len(context) == 0
    assert context.product_analysis == ""
    assert context.profile.is_empty


def test_append_keeps_order():
    context = _filled(4)

    assert [t.text for t in context.turns] == ["0", "1", "2", "3"]
    assert [t.role for t in context.turns] == ["user", "assistant", "user", "assistant"]


def test_append_returns_turn():
    turn = ConversationContext("s1").append("user", "halo")

    assert turn == ConversationTurn(role="user", text="halo")


def test_turns_is_a_snapshot():
    context = _filled(2)
    snapshot = context.turns

    context.append("user", "later")

    assert len(snapshot) == 2
    assert len(context.turns) == 3


@pytest.mark.parametrize(
    ("count", "size", "expected"),
    [
        (0, 10, []),
        (3, 10, ["0", "1", "2"]),
        (10, 10, [str(i) for i in range(10)]),
        (12, 10, [str(i) for i in range(2, 12)]),
        (5, 1, ["4"]),
        (5, 0, []),
        (5, -1, []),
    ],
)
def test_window_is_a_contiguous_suffix(count, size, expected):
    assert [t.text for t in _filled(count).window(size)] == expected


def test_initial_turns_and_profile():
    profile = HealthProfileSummary(conditions=("Asam urat",))
    turns = [ConversationTurn(role="assistant", text="analisis")]

    context = ConversationContext("s1", "analisis", profile, turns)

    assert context.profile is profile
    assert context.turns == tuple(turns)
