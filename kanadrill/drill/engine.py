"""
QuizEngine - Quiz session state machine.

States:
    Idle -> Presenting(i) -> Feedback(i, correct) -> Presenting(i+1) ... -> Completed

Idle is reachable from any state through abort(). Entering Feedback arms a
cancelable dwell timer that calls advance(); every exit from Feedback
disarms it, and a stale timer is a no-op.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from kanadrill.schemas import AnswerRecord, SelectionRequest, VocabularyEntry
from kanadrill.utils.config import DEFAULT_DWELL_SECONDS

from .errors import EmptySelection, InvalidState
from .scheduler import NullScheduler, ScheduledHandle, Scheduler
from .selection import QuizSet, SetSelector, normalize
from .tracker import WrongAnswerTracker


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# States
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Presenting:
    index: int


@dataclass(frozen=True)
class Feedback:
    index: int
    correct: bool


@dataclass(frozen=True)
class Completed:
    pass


EngineState = Union[Idle, Presenting, Feedback, Completed]


# -----------------------------------------------------------------------------
# Result ledger
# -----------------------------------------------------------------------------

class ResultLedger:
    """Append-only answer records for the current session."""

    def __init__(self):
        self._records: list[AnswerRecord] = []

    def append(self, record: AnswerRecord):
        self._records.append(record)

    def reset(self) -> tuple[AnswerRecord, ...]:
        """Empty the ledger, returning what it held."""
        records = tuple(self._records)
        self._records = []
        return records

    @property
    def records(self) -> tuple[AnswerRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------

class QuizEngine:
    """
    Drive one quiz session at a time.

    Every public operation is guarded by the current state and serialized
    with a re-entrant lock, so a dwell timer firing on another thread
    cannot interleave with a Presenter call.
    """

    def __init__(
        self,
        tracker: WrongAnswerTracker,
        selector: Optional[SetSelector] = None,
        scheduler: Optional[Scheduler] = None,
        dwell_seconds: float = DEFAULT_DWELL_SECONDS,
        evict_on_correct: bool = False,
    ):
        """
        Initialize engine.

        Args:
            tracker: Process-wide WrongAnswerTracker to update on misses
            selector: SetSelector used by start_request()
            scheduler: Scheduler for the feedback dwell (default: never fires)
            dwell_seconds: Delay before auto-advancing out of Feedback
            evict_on_correct: Remove a tracked symbol when it is answered correctly
        """
        self.tracker = tracker
        self.selector = selector
        self.scheduler = scheduler or NullScheduler()
        self.dwell_seconds = dwell_seconds
        self.evict_on_correct = evict_on_correct

        self._lock = threading.RLock()
        self._state: EngineState = Idle()
        self._quiz_set: QuizSet = ()
        self._ledger = ResultLedger()
        self._score = 0
        self._started = False
        self._timer: Optional[ScheduledHandle] = None
        self._feedback_generation = 0

    # -------------------------------------------------------------------------
    # Observables
    # -------------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def quiz_set(self) -> QuizSet:
        return self._quiz_set

    @property
    def ledger(self) -> tuple[AnswerRecord, ...]:
        return self._ledger.records

    @property
    def progress(self) -> tuple[int, int]:
        """(questions answered, questions in the set)"""
        return len(self._ledger), len(self._quiz_set)

    def current_question(self) -> VocabularyEntry:
        with self._lock:
            if not isinstance(self._state, (Presenting, Feedback)):
                self._invalid("current_question", "Presenting or Feedback")
            return self._quiz_set[self._state.index]

    def score(self) -> tuple[int, int]:
        """(correct count, questions answered so far)"""
        with self._lock:
            if not self._started:
                self._invalid("score", "a started session")
            return self._score, len(self._ledger)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self, quiz_set: QuizSet):
        """
        Begin a session over quiz_set.

        Raises:
            InvalidState: If a session is in progress
            EmptySelection: If quiz_set is empty
        """
        with self._lock:
            if not isinstance(self._state, (Idle, Completed)):
                self._invalid("start", "Idle or Completed")
            quiz_set = tuple(quiz_set)
            if not quiz_set:
                raise EmptySelection("Cannot start a session with no questions")

            self._quiz_set = quiz_set
            self._ledger.reset()
            self._score = 0
            self._started = True
            self._state = Presenting(0)
            logger.info("Session started with %d questions", len(quiz_set))

    def start_request(self, request: SelectionRequest):
        """Resolve a selection request and start a session over it."""
        if self.selector is None:
            raise RuntimeError("QuizEngine has no SetSelector; call start() with a QuizSet")
        with self._lock:
            # check state before consuming randomness
            if not isinstance(self._state, (Idle, Completed)):
                self._invalid("start", "Idle or Completed")
            self.start(self.selector.resolve(request))

    def submit(self, raw_input: str) -> AnswerRecord:
        """
        Answer the current question.

        Returns:
            The AnswerRecord appended to the ledger

        Raises:
            InvalidState: If not presenting a question
        """
        with self._lock:
            if not isinstance(self._state, Presenting):
                self._invalid("submit", "Presenting")

            index = self._state.index
            entry = self._quiz_set[index]
            user_input = normalize(raw_input)
            correct = user_input == entry.transliteration

            record = AnswerRecord(
                symbol=entry.symbol,
                user_input=user_input,
                expected=entry.transliteration,
                correct=correct,
                sequence_index=index,
            )
            self._ledger.append(record)

            if correct:
                self._score += 1
                if self.evict_on_correct:
                    self.tracker.discard(entry.symbol)
            else:
                self.tracker.record(entry.symbol, entry.transliteration)

            logger.debug(
                "Q%d %s: %r -> %s",
                index + 1, entry.symbol, user_input, "correct" if correct else f"wrong ({entry.transliteration})",
            )
            self._enter_feedback(index, correct)
            return record

    def advance(self):
        """
        Leave Feedback for the next question, or Completed after the last.

        Raises:
            InvalidState: If not in Feedback
        """
        with self._lock:
            if not isinstance(self._state, Feedback):
                self._invalid("advance", "Feedback")
            self._disarm_timer()

            next_index = self._state.index + 1
            if next_index < len(self._quiz_set):
                self._state = Presenting(next_index)
            else:
                self._state = Completed()
                logger.info("Session completed: %d/%d correct", self._score, len(self._ledger))

    def abort(self) -> tuple[AnswerRecord, ...]:
        """
        Return to Idle from any state, discarding the session ledger.

        Returns:
            The discarded records, for callers that still want to show them
        """
        with self._lock:
            self._disarm_timer()
            discarded = self._ledger.reset()
            self._score = 0
            if not isinstance(self._state, Idle):
                logger.info("Session aborted after %d answers", len(discarded))
            self._state = Idle()
            return discarded

    # -------------------------------------------------------------------------
    # Dwell timer
    # -------------------------------------------------------------------------

    def _enter_feedback(self, index: int, correct: bool):
        self._state = Feedback(index, correct)
        self._feedback_generation += 1
        generation = self._feedback_generation
        self._timer = self.scheduler.schedule(
            self.dwell_seconds,
            lambda: self._on_dwell_elapsed(generation),
        )
        logger.debug("Armed dwell timer (generation %d, %.2fs)", generation, self.dwell_seconds)

    def _on_dwell_elapsed(self, generation: int):
        with self._lock:
            if generation != self._feedback_generation or not isinstance(self._state, Feedback):
                logger.debug("Ignoring stale dwell timer (generation %d)", generation)
                return
            logger.debug("Dwell timer fired (generation %d)", generation)
            self.advance()

    def _disarm_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Cancelled dwell timer (generation %d)", self._feedback_generation)
        # any timer already in flight for this Feedback becomes stale
        self._feedback_generation += 1

    def _invalid(self, operation: str, expected: str):
        error = InvalidState(operation, self._state, expected)
        logger.error(str(error))
        raise error
