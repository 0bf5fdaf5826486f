"""Shared fixtures: fake collaborators, a manual clock and seeded randomness."""

import random

import pytest

from pixeldino.config.settings import GameSettings
from pixeldino.core.events import EventBus, EventType
from pixeldino.core.scheduler import TickScheduler
from pixeldino.game.collaborators import (
    CelebrationEffect,
    Minter,
    ScoreReporter,
    ScoreStore,
    SoundPlayer,
)
from pixeldino.game.engine import GameEngine


class FakeAudio(SoundPlayer):
    def __init__(self):
        self.calls: list[str] = []

    def play_jump(self):
        self.calls.append("jump")

    def play_game_over(self):
        self.calls.append("game_over")

    def play_celebrate(self):
        self.calls.append("celebrate")

    def start_track(self):
        self.calls.append("start_track")

    def stop_track(self):
        self.calls.append("stop_track")


class FakeStore(ScoreStore):
    def __init__(self, high_score: int = 0):
        self.high_score = high_score
        self.writes: list[int] = []

    def get_high_score(self) -> int:
        return self.high_score

    def set_high_score(self, score: int) -> None:
        self.high_score = score
        self.writes.append(score)


class FakeMinter(Minter):
    def __init__(self):
        self.requests: list[int] = []

    def request_mint(self, score: int) -> None:
        self.requests.append(score)


class FakeReporter(ScoreReporter):
    def __init__(self):
        self.reports: list[int] = []

    def report_score(self, score: int) -> None:
        self.reports.append(score)


class FakeCelebration(CelebrationEffect):
    def __init__(self):
        self.count = 0

    def celebrate(self) -> None:
        self.count += 1


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 10_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def game_settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded(event_bus) -> dict[EventType, list]:
    """Events emitted on the bus, grouped by type."""
    seen: dict[EventType, list] = {t: [] for t in EventType}
    for event_type, events in seen.items():
        event_bus.subscribe(event_type, events.append)
    return seen


@pytest.fixture
def scheduler() -> TickScheduler:
    return TickScheduler()


@pytest.fixture
def audio() -> FakeAudio:
    return FakeAudio()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(high_score=100)


@pytest.fixture
def minter() -> FakeMinter:
    return FakeMinter()


@pytest.fixture
def reporter() -> FakeReporter:
    return FakeReporter()


@pytest.fixture
def celebration() -> FakeCelebration:
    return FakeCelebration()


@pytest.fixture
def engine(game_settings, event_bus, scheduler, audio, store, minter, reporter, celebration, clock, rng):
    engine = GameEngine(
        settings=game_settings,
        event_bus=event_bus,
        scheduler=scheduler,
        audio=audio,
        store=store,
        minter=minter,
        reporter=reporter,
        celebration=celebration,
        clock=clock,
        rng=rng,
    )
    yield engine
    engine.close()
