"""
Tests for the TriviaRound state machine.

Time is driven by the FakeClock from conftest, so expiry is exact.
"""

import pytest

from triviabot.core.exceptions import PersistenceWriteError, SourceExhausted
from triviabot.domain.models import AnswerOutcome, Question, QuestionRecord
from triviabot.game.question_source import CorpusQuestionSource
from triviabot.game.round_state import RoundStateRepository
from triviabot.game.score_store import ScoreStore
from triviabot.game.trivia_round import TriviaRound


class FailingSaveStore:
    """Document store wrapper whose saves fail for selected keys."""

    def __init__(self, inner, failing_keys):
        self.inner = inner
        self.failing_keys = set(failing_keys)

    async def load(self, key):
        return await self.inner.load(key)

    async def save(self, key, data):
        if key in self.failing_keys:
            raise PersistenceWriteError(key, "disk full")
        await self.inner.save(key, data)

    async def delete(self, key):
        if key in self.failing_keys:
            raise PersistenceWriteError(key, "disk full")
        await self.inner.delete(key)


@pytest.mark.asyncio
async def test_ask_question_persists_and_posts(trivia_round, round_state, messenger, clock):
    question = await trivia_round.ask_question()

    assert question.prompt == "What is the capital of France?"
    assert question.issued_at == clock.now
    assert await round_state.load() == question
    assert messenger.sent == ["[Q] What is the capital of France?\n(30s to answer)"]


@pytest.mark.asyncio
async def test_idle_round_is_inactive(trivia_round, messenger):
    status = await trivia_round.check_and_expire()

    assert not status.active
    assert not status.expired
    assert messenger.sent == []


@pytest.mark.asyncio
async def test_round_active_within_window(trivia_round, clock):
    await trivia_round.ask_question()
    clock.advance(29.5)

    assert await trivia_round.is_active()
    assert trivia_round.seconds_remaining() == 1


@pytest.mark.asyncio
async def test_timeout_fires_exactly_once(trivia_round, round_state, messenger, clock):
    await trivia_round.ask_question()
    clock.advance(30)

    first = await trivia_round.check_and_expire()
    second = await trivia_round.check_and_expire()

    assert first.expired and not first.active
    assert not second.expired and not second.active
    assert await round_state.load() is None
    assert messenger.sent[1:] == ['[x] Timer ran out, answer was "Paris"']


@pytest.mark.asyncio
async def test_correct_answer_scores_and_clears(trivia_round, scores, round_state, messenger):
    await trivia_round.ask_question()

    outcome = await trivia_round.submit_answer("u1", "alice", "  the PARIS ")

    assert outcome is AnswerOutcome.CORRECT
    assert await scores.points_for("u1") == 1
    assert await round_state.load() is None
    assert messenger.sent[-1] == "[A: alice (1p)] Yes, Paris"


@pytest.mark.asyncio
async def test_points_accumulate_across_rounds(trivia_round, scores, messenger):
    for _ in range(3):
        await trivia_round.ask_question()
        await trivia_round.submit_answer("u1", "alice", "paris")

    assert await scores.points_for("u1") == 3
    assert messenger.sent[-1] == "[A: alice (3p)] Yes, Paris"


@pytest.mark.asyncio
async def test_incorrect_answer_keeps_round(trivia_round, round_state, messenger, clock):
    question = await trivia_round.ask_question()
    clock.advance(10)

    outcome = await trivia_round.submit_answer("u2", "bob", "The London!")

    assert outcome is AnswerOutcome.INCORRECT
    stored = await round_state.load()
    assert stored == question
    assert stored.issued_at == question.issued_at
    assert messenger.sent[-1] == (
        '[A: bob (0p)] Nope, "london" is wrong. 20s left to answer...'
    )


@pytest.mark.asyncio
async def test_no_double_scoring(trivia_round, scores, messenger):
    await trivia_round.ask_question()

    first = await trivia_round.submit_answer("u1", "alice", "Paris")
    second = await trivia_round.submit_answer("u2", "bob", "Paris")

    assert first is AnswerOutcome.CORRECT
    assert second is AnswerOutcome.NO_ROUND
    assert await scores.points_for("u1") == 1
    assert await scores.points_for("u2") == 0
    assert len(messenger.sent) == 2


@pytest.mark.asyncio
async def test_late_answer_expires_round(trivia_round, scores, round_state, messenger, clock):
    await trivia_round.ask_question()
    clock.advance(31)

    outcome = await trivia_round.submit_answer("u1", "alice", "Paris")

    assert outcome is AnswerOutcome.EXPIRED
    assert await scores.points_for("u1") == 0
    assert await round_state.load() is None
    assert messenger.sent[-1] == '[x] Timer ran out, answer was "Paris"'


@pytest.mark.asyncio
async def test_answer_with_no_round(trivia_round, messenger):
    outcome = await trivia_round.submit_answer("u1", "alice", "Paris")

    assert outcome is AnswerOutcome.NO_ROUND
    assert messenger.sent == []


@pytest.mark.asyncio
async def test_new_question_replaces_current(scores, round_state, messenger, clock, sample_records):
    source = CorpusQuestionSource(sample_records[:2], on_exhausted="fail")
    trivia = TriviaRound(source, scores, round_state, messenger, clock=clock)

    first = await trivia.ask_question()
    clock.advance(5)
    second = await trivia.ask_question()

    assert first.prompt != second.prompt
    assert await round_state.load() == second


@pytest.mark.asyncio
async def test_exhausted_source_leaves_round_idle(scores, round_state, messenger, clock):
    source = CorpusQuestionSource(
        [QuestionRecord(prompt="Only question?", answer="Yes")], on_exhausted="fail"
    )
    trivia = TriviaRound(source, scores, round_state, messenger, clock=clock)
    await trivia.ask_question()
    await trivia.submit_answer("u1", "alice", "yes")

    with pytest.raises(SourceExhausted):
        await trivia.ask_question()

    assert await round_state.load() is None
    assert len(messenger.sent) == 2


@pytest.mark.asyncio
async def test_round_survives_restart(paris_source, scores, round_state, messenger, clock):
    """A fresh TriviaRound over the same store sees the persisted question."""
    first = TriviaRound(paris_source, scores, round_state, messenger, clock=clock)
    await first.ask_question()
    clock.advance(12)

    second = TriviaRound(paris_source, scores, round_state, messenger, clock=clock)

    assert await second.is_active()
    assert second.seconds_remaining() == 18


@pytest.mark.asyncio
async def test_failed_round_save_posts_nothing(paris_source, memory_store, scores, messenger, clock):
    state = RoundStateRepository(FailingSaveStore(memory_store, {"current_question"}))
    trivia = TriviaRound(paris_source, scores, state, messenger, clock=clock)

    with pytest.raises(PersistenceWriteError):
        await trivia.ask_question()

    assert messenger.sent == []


@pytest.mark.asyncio
async def test_failed_points_save_clears_round_without_scoring(
    paris_source, memory_store, round_state, messenger, clock
):
    scores = ScoreStore(FailingSaveStore(memory_store, {"user_points"}))
    trivia = TriviaRound(paris_source, scores, round_state, messenger, clock=clock)
    await trivia.ask_question()

    with pytest.raises(PersistenceWriteError):
        await trivia.submit_answer("u1", "alice", "Paris")

    assert await round_state.load() is None
    assert await scores.points_for("u1") == 0
    assert len(messenger.sent) == 1


@pytest.mark.asyncio
async def test_failed_round_clear_never_scores(paris_source, memory_store, scores, messenger, clock):
    state = RoundStateRepository(FailingSaveStore(memory_store, {"current_question"}))
    trivia = TriviaRound(paris_source, scores, state, messenger, clock=clock)
    question = Question.issue(await paris_source.next(), clock.now)
    await memory_store.save("current_question", question)

    for _ in range(2):
        with pytest.raises(PersistenceWriteError):
            await trivia.submit_answer("u1", "alice", "Paris")

    assert await scores.points_for("u1") == 0
    assert await state.load() == question
    assert messenger.sent == []


def test_seconds_remaining_rounds_up(clock):
    question = Question(prompt="Q?", answer="A", issued_at=clock.now)
    clock.advance(0.2)

    assert question.seconds_remaining(30, clock()) == 30
