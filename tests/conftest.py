"""Shared fixtures for KanaDrill tests."""

import random

import pytest

from kanadrill.drill import (
    CustomSetBuilder,
    ManualScheduler,
    QuizEngine,
    SetSelector,
    VocabularyCatalog,
    WrongAnswerTracker,
)


SMALL_TABLE = {
    "base": {"あ": "a", "い": "i", "う": "u"},
    "digraph": {"きゃ": "kya"},
    "voiced": {"が": "ga", "ぎ": "gi"},
    "semi_voiced": {"ぱ": "pa"},
}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def catalog():
    return VocabularyCatalog.from_mapping(SMALL_TABLE)


@pytest.fixture
def base_only_catalog():
    """Base = {あ -> a, い -> i}"""
    return VocabularyCatalog.from_mapping({"base": {"あ": "a", "い": "i"}})


@pytest.fixture
def tracker():
    return WrongAnswerTracker()


@pytest.fixture
def builder():
    return CustomSetBuilder()


@pytest.fixture
def selector(catalog, tracker, builder):
    return SetSelector(catalog, tracker, builder, rng=random.Random(42))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock=clock)


@pytest.fixture
def engine(tracker, selector, scheduler):
    return QuizEngine(tracker, selector=selector, scheduler=scheduler, dwell_seconds=1.2)
