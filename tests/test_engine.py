"""
Tests for the quiz session state machine.
"""

import logging
import random
import time

import pytest

from kanadrill.drill import (
    Completed,
    EmptySelection,
    Feedback,
    Idle,
    InvalidState,
    ManualScheduler,
    Presenting,
    QuizEngine,
    SetSelector,
    ThreadingScheduler,
    WrongAnswerTracker,
)
from kanadrill.schemas import Category, CustomSymbols, OneCategory, VocabularyEntry, WrongOnly


def entry(symbol, transliteration, category=Category.BASE):
    return VocabularyEntry(symbol=symbol, transliteration=transliteration, category=category)


A = entry("あ", "a")
I = entry("い", "i")
U = entry("う", "u")


def answer_correctly(engine):
    return engine.submit(engine.current_question().transliteration)


def answer_wrongly(engine):
    return engine.submit("zzz")


class TestStart:
    """Test session start."""

    def test_initial_state(self, engine):
        assert engine.state == Idle()

    def test_start_presents_first_question(self, engine):
        engine.start((A, I))
        assert engine.state == Presenting(0)
        assert engine.current_question() == A
        assert engine.score() == (0, 0)
        assert engine.ledger == ()

    def test_start_empty(self, engine):
        with pytest.raises(EmptySelection):
            engine.start(())
        assert engine.state == Idle()

    def test_start_while_presenting(self, engine):
        engine.start((A,))
        with pytest.raises(InvalidState):
            engine.start((I,))
        assert engine.current_question() == A

    def test_start_after_completed_resets(self, engine):
        engine.start((A,))
        answer_wrongly(engine)
        engine.advance()
        assert engine.state == Completed()

        engine.start((I, U))
        assert engine.state == Presenting(0)
        assert engine.score() == (0, 0)
        assert engine.ledger == ()

    def test_start_request(self, engine):
        engine.start_request(OneCategory(category=Category.VOICED))
        assert {q.symbol for q in engine.quiz_set} == {"が", "ぎ"}
        assert engine.progress == (0, 2)

    def test_start_request_empty_custom(self, engine):
        with pytest.raises(EmptySelection):
            engine.start_request(CustomSymbols())
        assert engine.state == Idle()

    def test_start_request_empty_wrong_only(self, engine):
        with pytest.raises(EmptySelection):
            engine.start_request(WrongOnly())
        assert engine.state == Idle()

    def test_start_request_without_selector(self, tracker):
        engine = QuizEngine(tracker)
        with pytest.raises(RuntimeError):
            engine.start_request(WrongOnly())

    def test_score_before_start(self, engine):
        with pytest.raises(InvalidState):
            engine.score()


class TestSubmit:
    """Test answer evaluation and bookkeeping."""

    def test_correct_answer_is_normalized(self, engine):
        engine.start((A, I))
        record = engine.submit("  A ")
        assert record.correct is True
        assert record.user_input == "a"
        assert record.expected == "a"
        assert record.sequence_index == 0
        assert engine.state == Feedback(0, True)
        assert engine.score() == (1, 1)

    def test_wrong_answer_updates_tracker(self, engine, tracker):
        engine.start((I,))
        record = engine.submit("e")
        assert record.correct is False
        assert engine.state == Feedback(0, False)
        assert tracker.snapshot() == {"い": "i"}

    def test_blank_answer_is_wrong(self, engine, tracker):
        engine.start((A,))
        record = engine.submit("   ")
        assert record.correct is False
        assert record.user_input == ""
        assert "あ" in tracker

    def test_correct_answer_leaves_tracker_untouched(self, engine, tracker):
        tracker.record("あ", "a")
        engine.start((A,))
        answer_correctly(engine)
        assert tracker.snapshot() == {"あ": "a"}

    def test_evict_on_correct_policy(self, tracker):
        tracker.record("あ", "a")
        engine = QuizEngine(tracker, scheduler=ManualScheduler(), evict_on_correct=True)
        engine.start((A,))
        answer_correctly(engine)
        assert "あ" not in tracker

    def test_submit_outside_presenting(self, engine, tracker):
        with pytest.raises(InvalidState):
            engine.submit("a")

        engine.start((A, I))
        answer_wrongly(engine)
        snapshot = tracker.snapshot()
        ledger = engine.ledger
        with pytest.raises(InvalidState):
            engine.submit("a")
        assert engine.ledger == ledger
        assert engine.score() == (0, 1)
        assert tracker.snapshot() == snapshot

    def test_total_asked_grows_with_answers(self, engine):
        engine.start((A, I, U))
        assert engine.score() == (0, 0)
        answer_correctly(engine)
        engine.advance()
        assert engine.score() == (1, 1)
        answer_wrongly(engine)
        assert engine.score() == (1, 2)

    def test_score_is_monotonic(self, engine):
        rng = random.Random(11)
        quiz_set = tuple(entry(chr(0x3042 + i), f"x{i}") for i in range(20))
        engine.start(quiz_set)
        previous = 0
        while not isinstance(engine.state, Completed):
            if rng.random() < 0.5:
                answer_correctly(engine)
            else:
                answer_wrongly(engine)
            correct, _ = engine.score()
            assert correct - previous in (0, 1)
            previous = correct
            engine.advance()
        assert engine.score()[1] == 20


class TestAdvance:
    """Test transitions out of Feedback."""

    def test_advance_to_next_question(self, engine):
        engine.start((A, I))
        answer_correctly(engine)
        engine.advance()
        assert engine.state == Presenting(1)
        assert engine.current_question() == I

    def test_advance_twice(self, engine):
        engine.start((A, I))
        answer_correctly(engine)
        engine.advance()
        with pytest.raises(InvalidState):
            engine.advance()
        assert engine.state == Presenting(1)

    def test_advance_from_idle(self, engine):
        with pytest.raises(InvalidState):
            engine.advance()

    def test_advance_after_last_completes(self, engine):
        engine.start((A,))
        answer_correctly(engine)
        engine.advance()
        assert engine.state == Completed()
        with pytest.raises(InvalidState):
            engine.submit("a")
        with pytest.raises(InvalidState):
            engine.current_question()
        assert engine.score() == (1, 1)

    def test_invalid_state_details(self, engine):
        with pytest.raises(InvalidState) as excinfo:
            engine.advance()
        assert excinfo.value.operation == "advance"
        assert excinfo.value.state == Idle()


class TestAbort:
    """Test aborting a session."""

    def test_abort_discards_ledger(self, engine):
        engine.start((A, I))
        answer_wrongly(engine)
        discarded = engine.abort()
        assert engine.state == Idle()
        assert engine.ledger == ()
        assert [r.symbol for r in discarded] == ["あ"]

    def test_abort_keeps_tracker(self, engine, tracker):
        engine.start((A,))
        answer_wrongly(engine)
        engine.abort()
        assert "あ" in tracker

    def test_score_after_abort(self, engine):
        engine.start((A, I))
        answer_correctly(engine)
        engine.abort()
        assert engine.score() == (0, 0)

    def test_abort_from_idle(self, engine):
        assert engine.abort() == ()
        assert engine.state == Idle()

    def test_start_after_abort(self, engine):
        engine.start((A,))
        engine.abort()
        engine.start((I,))
        assert engine.current_question() == I


class TestDwellTimer:
    """Test the feedback auto-advance."""

    def test_timer_armed_on_feedback(self, engine, scheduler, clock):
        engine.start((A, I))
        answer_correctly(engine)
        assert len(scheduler.pending) == 1
        clock.now = 1.0
        scheduler.run_due()
        assert engine.state == Feedback(0, True)
        clock.now = 1.2
        scheduler.run_due()
        assert engine.state == Presenting(1)

    def test_timer_completes_last_question(self, engine, scheduler):
        engine.start((A,))
        answer_correctly(engine)
        scheduler.fire_all()
        assert engine.state == Completed()

    def test_manual_advance_wins(self, engine, scheduler):
        engine.start((A, I, U))
        answer_correctly(engine)
        engine.advance()
        assert scheduler.pending == []
        scheduler.fire_all()
        assert engine.state == Presenting(1)

    def test_abort_disarms_timer(self, engine, scheduler):
        engine.start((A, I))
        answer_correctly(engine)
        engine.abort()
        assert scheduler.fire_all() == 0
        assert engine.state == Idle()

    def test_stale_timer_is_noop(self, tracker):
        # a scheduler whose cancel() does nothing, like a timer already in flight
        class LeakyHandle:
            def cancel(self):
                pass

        callbacks = []

        class LeakyScheduler:
            def schedule(self, delay, callback):
                callbacks.append(callback)
                return LeakyHandle()

        engine = QuizEngine(tracker, scheduler=LeakyScheduler())
        engine.start((A, I, U))
        answer_correctly(engine)
        engine.advance()
        answer_correctly(engine)
        assert engine.state == Feedback(1, True)

        callbacks[0]()  # timer from the first Feedback
        assert engine.state == Feedback(1, True)
        callbacks[1]()
        assert engine.state == Presenting(2)
        callbacks[1]()
        assert engine.state == Presenting(2)

    def test_one_timer_per_feedback(self, engine, scheduler):
        engine.start((A, I, U))
        for _ in range(3):
            answer_correctly(engine)
            assert len(scheduler.pending) == 1
            scheduler.fire_all()
        assert engine.state == Completed()

    def test_timer_lifecycle_is_logged(self, engine, scheduler, caplog):
        caplog.set_level(logging.DEBUG, logger="kanadrill.drill.engine")
        engine.start((A, I, U))
        answer_correctly(engine)
        engine.advance()
        answer_correctly(engine)
        scheduler.fire_all()

        assert "Armed dwell timer (generation 1" in caplog.text
        assert "Cancelled dwell timer" in caplog.text
        assert "Dwell timer fired" in caplog.text


class TestThreadedTimer:
    """Race a real timer thread against manual advance()."""

    DWELL = 0.05

    def test_timer_advances_on_its_own(self, tracker):
        engine = QuizEngine(tracker, scheduler=ThreadingScheduler(), dwell_seconds=self.DWELL)
        engine.start((A, I))
        answer_correctly(engine)
        time.sleep(self.DWELL * 4)
        assert engine.state == Presenting(1)

    def test_exactly_one_advance_per_feedback(self, tracker):
        rng = random.Random(3)
        quiz_set = tuple(entry(chr(0x3042 + i), f"x{i}") for i in range(12))
        engine = QuizEngine(tracker, scheduler=ThreadingScheduler(), dwell_seconds=self.DWELL)
        engine.start(quiz_set)

        for i in range(len(quiz_set)):
            assert engine.state == Presenting(i)
            answer_correctly(engine)
            # land on either side of the timer deadline
            time.sleep(rng.uniform(0, self.DWELL * 2))
            try:
                engine.advance()
            except InvalidState:
                pass
            time.sleep(self.DWELL * 3)

            if i + 1 < len(quiz_set):
                assert engine.state == Presenting(i + 1)
            else:
                assert engine.state == Completed()

        assert engine.score() == (len(quiz_set), len(quiz_set))


class TestScenarios:
    """End-to-end sessions over Base = {あ: a, い: i}."""

    @pytest.fixture
    def session(self, base_only_catalog):
        tracker = WrongAnswerTracker()
        selector = SetSelector(base_only_catalog, tracker, rng=random.Random(5))
        engine = QuizEngine(tracker, selector=selector, scheduler=ManualScheduler())
        engine.start_request(OneCategory(category=Category.BASE))
        return engine, tracker

    def test_two_question_session(self, session):
        engine, _ = session
        assert len(engine.quiz_set) == 2
        assert sorted(q.symbol for q in engine.quiz_set) == ["あ", "い"]

    def test_uppercase_answer_is_correct(self, session):
        engine, _ = session
        if engine.current_question().symbol != "あ":
            answer_correctly(engine)
            engine.advance()
        assert engine.submit("A").correct is True

    def test_miss_goes_to_tracker(self, session):
        engine, tracker = session
        answers = {"あ": "A", "い": "e"}
        for _ in range(2):
            engine.submit(answers[engine.current_question().symbol])
            engine.advance()

        assert engine.state == Completed()
        assert tracker.snapshot() == {"い": "i"}
        by_symbol = {r.symbol: r for r in engine.ledger}
        assert by_symbol["あ"].correct is True
        assert by_symbol["い"].correct is False
        assert engine.score() == (1, 2)

    def test_review_session_from_mistakes(self, session):
        engine, tracker = session
        while not isinstance(engine.state, Completed):
            answer_wrongly(engine)
            engine.advance()

        engine.start_request(WrongOnly())
        assert sorted(q.symbol for q in engine.quiz_set) == ["あ", "い"]
        assert engine.score() == (0, 0)
