"""
The trivia round state machine.

A round is either idle (no question) or active (one question and the moment
it was asked). There is no background timer: expiry is detected lazily
whenever the round is checked or an answer comes in, and every change is
written to the round-state repository so the next webhook call, possibly in a
fresh process, picks it up.
"""

from collections.abc import Callable
from datetime import datetime

from triviabot.core.logging.logger import get_logger
from triviabot.domain.interfaces.messaging_interface import IMessenger
from triviabot.domain.interfaces.question_source import IQuestionSource
from triviabot.domain.models import AnswerOutcome, Question, RoundStatus, utc_now

from .normalizer import answers_match, normalize
from .round_state import RoundStateRepository
from .score_store import ScoreStore

logger = get_logger(__name__)

DEFAULT_SECS_TO_ANSWER = 30
POINTS_PER_ANSWER = 1


class TriviaRound:
    """
    Owns the single current question and its lifecycle.

    Every public operation reloads the persisted question first, so the
    object can be built per request or kept for the life of the process.
    """

    def __init__(
        self,
        question_source: IQuestionSource,
        scores: ScoreStore,
        state: RoundStateRepository,
        messenger: IMessenger,
        secs_to_answer: int = DEFAULT_SECS_TO_ANSWER,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.question_source = question_source
        self.scores = scores
        self.state = state
        self.messenger = messenger
        self.secs_to_answer = secs_to_answer
        self.clock = clock
        self.current_question: Question | None = None

    async def _reload(self) -> Question | None:
        self.current_question = await self.state.load()
        return self.current_question

    async def _set_question(self, question: Question | None) -> None:
        await self.state.save(question)
        self.current_question = question

    def seconds_remaining(self, question: Question | None = None) -> int:
        question = question or self.current_question
        if question is None:
            return 0
        return question.seconds_remaining(self.secs_to_answer, self.clock())

    async def ask_question(self) -> Question:
        """
        Draw a new question, persist it and post it to the chat.

        Any question still on the table is replaced.

        Raises:
            ProviderError, SourceExhausted: The source failed; the round is unchanged
            PersistenceWriteError: The new round could not be saved; nothing is posted
        """
        record = await self.question_source.next()
        question = Question.issue(record, self.clock())
        await self._set_question(question)

        logger.info(f"Asked question: {question.prompt!r} (answer {question.answer!r})")
        await self.messenger.send_text(
            f"[Q] {question.prompt}\n({self.secs_to_answer}s to answer)"
        )
        return question

    async def _expire(self, question: Question) -> None:
        await self._set_question(None)
        logger.info(f"Round timed out, answer was {question.answer!r}")
        await self.messenger.send_text(
            f'[x] Timer ran out, answer was "{question.answer}"'
        )

    async def check_and_expire(self) -> RoundStatus:
        """
        Report whether a round is live, expiring it if its window has passed.

        Expiring clears the round and posts the timeout message, so this check
        has side effects; ``expired`` in the result tells the caller it happened.
        """
        question = await self._reload()
        if question is None:
            return RoundStatus(active=False)

        if self.seconds_remaining(question) == 0:
            await self._expire(question)
            return RoundStatus(active=False, expired=True)

        return RoundStatus(active=True)

    async def is_active(self) -> bool:
        """Shorthand for check_and_expire().active, with the same side effect."""
        return (await self.check_and_expire()).active

    async def submit_answer(
        self, user_id: str, username: str, answer_attempt: str
    ) -> AnswerOutcome:
        """
        Score an answer against the current question.

        Returns:
            CORRECT (point awarded, round cleared), INCORRECT (round stays
            active), EXPIRED (window had passed, answer revealed, round
            cleared) or NO_ROUND.

        Raises:
            PersistenceWriteError: Points or round state could not be saved
        """
        question = await self._reload()
        if question is None:
            return AnswerOutcome.NO_ROUND

        if self.seconds_remaining(question) == 0:
            await self._expire(question)
            return AnswerOutcome.EXPIRED

        if answers_match(question.answer, answer_attempt):
            # Clearing first keeps scoring at most once per round
            await self._set_question(None)
            total = await self.scores.add_points(user_id, POINTS_PER_ANSWER)
            await self.messenger.send_text(
                f"[A: {username} ({total}p)] Yes, {question.answer}"
            )
            return AnswerOutcome.CORRECT

        attempt_key = normalize(answer_attempt)
        total = await self.scores.points_for(user_id)
        remaining = self.seconds_remaining(question)
        logger.debug(f"Wrong answer {attempt_key!r}, expected {normalize(question.answer)!r}")
        await self.messenger.send_text(
            f'[A: {username} ({total}p)] Nope, "{attempt_key}" is wrong. '
            f"{remaining}s left to answer..."
        )
        return AnswerOutcome.INCORRECT
