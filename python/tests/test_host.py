"""Rounds as the app shell runs them: best times, milestones, timers."""

from __future__ import annotations

import random
from typing import Callable

import pytest

from heritage_puzzle.backend.data import TOPIC_IMAGES
from heritage_puzzle.backend.engine.gameplay import PuzzleGame
from heritage_puzzle.backend.engine.session import GameHost
from heritage_puzzle.backend.models import Topic
from heritage_puzzle.backend.storage import MemoryStore

from conftest import FakeClock, ScriptedRandom

Solver = Callable[[PuzzleGame], int]


@pytest.fixture
def host(store: MemoryStore, rng: random.Random, clock: FakeClock) -> GameHost:
    return GameHost(store, rng=rng, clock=clock)


def _advantage(host: GameHost) -> GameHost:
    host.users.login("lan@example.vn", "secret")
    host.users.upgrade_to_advantage()
    return host


# -- topic rounds -------------------------------------------------------------


def test_start_topic(host: GameHost) -> None:
    session = host.start_topic(Topic.CULTURE, 3)

    assert host.session is session
    assert session.key == "culture-3"
    assert session.game.difficulty == 3
    assert session.game.image in TOPIC_IMAGES[Topic.CULTURE]
    assert session.best_time is None
    assert session.result is None


@pytest.mark.parametrize("difficulty", [1, 5])
def test_bad_difficulty_is_rejected(host: GameHost, difficulty: int) -> None:
    with pytest.raises(ValueError):
        host.start_topic(Topic.HISTORY, difficulty)
    assert host.session is None


def test_completion_records_best_time(host: GameHost, clock: FakeClock, solve: Solver) -> None:
    session = host.start_topic(Topic.HISTORY, 3)
    clock.advance(42.6)

    moves = solve(session.game)

    assert session.result is not None
    assert session.result.elapsed_seconds == 42
    assert session.result.moves == moves
    assert session.result.is_new_best
    assert session.result.best_time == 42
    assert host.best_times.get("history-3") == 42


def test_slower_run_keeps_previous_best(host: GameHost, clock: FakeClock, solve: Solver) -> None:
    first = host.start_topic(Topic.HISTORY, 3)
    clock.advance(30)
    solve(first.game)

    second = host.start_topic(Topic.HISTORY, 3)
    assert second.best_time == 30
    clock.advance(55)
    solve(second.game)

    assert second.result is not None
    assert second.result.elapsed_seconds == 55
    assert not second.result.is_new_best
    assert second.result.best_time == 30
    assert host.best_times.get("history-3") == 30


def test_new_round_closes_previous(host: GameHost) -> None:
    first = host.start_topic(Topic.HISTORY, 2)
    second = host.start_topic(Topic.CULTURE, 2)

    assert first.closed
    assert not second.closed
    assert host.session is second


def test_end_session(host: GameHost) -> None:
    session = host.start_topic(Topic.HISTORY, 2)

    host.end_session()

    assert session.closed
    assert host.session is None
    host.end_session()


def test_reshuffle_clears_result_and_refreshes_best(
    host: GameHost, clock: FakeClock, solve: Solver
) -> None:
    session = host.start_topic(Topic.CULTURE, 3)
    clock.advance(20)
    solve(session.game)
    assert session.result is not None

    session.reshuffle()

    assert session.result is None
    assert session.best_time == 20
    assert not session.game.is_complete
    assert session.game.move_count == 0


# -- rounds that start solved ---------------------------------------------------


def test_solved_shuffle_does_not_block_later_best(
    store: MemoryStore, clock: FakeClock, solve: Solver
) -> None:
    rng = ScriptedRandom(keep_solved=True)
    host = GameHost(store, rng=rng, clock=clock)

    first = host.start_topic(Topic.HISTORY, 2)
    assert first.result is not None
    assert (first.result.elapsed_seconds, first.result.moves) == (0, 0)
    assert host.best_times.get("history-2") is None

    rng.keep_solved = False
    second = host.start_topic(Topic.HISTORY, 2)
    assert second.best_time is None
    clock.advance(9)
    solve(second.game)

    assert second.result is not None
    assert second.result.is_new_best
    assert second.result.best_time == 9
    assert host.best_times.get("history-2") == 9


def test_reshuffle_onto_solved_layout_completes(store: MemoryStore, clock: FakeClock) -> None:
    rng = ScriptedRandom(keep_solved=False)
    host = GameHost(store, rng=rng, clock=clock)
    session = host.start_topic(Topic.CULTURE, 3)
    clock.advance(4)
    assert session.poll_tick()

    rng.keep_solved = True
    session.reshuffle()

    assert session.result is not None
    assert session.result.moves == 0
    clock.advance(3)
    assert not session.poll_tick()


# -- campaign rounds ----------------------------------------------------------


def test_milestones_need_advantage(host: GameHost) -> None:
    with pytest.raises(PermissionError):
        host.start_milestone("trung-sisters-1", 2)

    host.users.login("lan@example.vn", "secret")
    with pytest.raises(PermissionError):
        host.start_milestone("trung-sisters-1", 2)


def test_unknown_milestone(host: GameHost) -> None:
    _advantage(host)

    with pytest.raises(KeyError):
        host.start_milestone("battle-of-nowhere", 2)


def test_locked_milestone_is_refused(host: GameHost) -> None:
    _advantage(host)

    with pytest.raises(PermissionError):
        host.start_milestone("bach-dang-2", 2)


def test_completing_milestone_unlocks_next(host: GameHost, clock: FakeClock, solve: Solver) -> None:
    _advantage(host)
    session = host.start_milestone("bach-dang-1", 3)

    assert session.key == "milestone-bach-dang-1-3"
    assert session.milestone_id == "bach-dang-1"
    assert session.game.image.title == "The Southern Han Invasion"
    assert not host.milestones.is_completed("bach-dang-1")

    clock.advance(12)
    solve(session.game)

    assert host.milestones.is_completed("bach-dang-1")
    assert host.best_times.get("milestone-bach-dang-1-3") == 12
    assert host.start_milestone("bach-dang-2", 2).key == "milestone-bach-dang-2-2"


# -- timers -------------------------------------------------------------------


def test_clock_ticks_until_completion(host: GameHost, clock: FakeClock, solve: Solver) -> None:
    session = host.start_topic(Topic.HISTORY, 3)

    assert not session.poll_tick()
    clock.advance(1)
    assert session.poll_tick()
    assert not session.poll_tick()

    solve(session.game)
    clock.advance(5)
    assert not session.poll_tick()


def test_closed_session_is_silent(host: GameHost, clock: FakeClock) -> None:
    session = host.start_topic(Topic.HISTORY, 2)
    session.preview()

    host.end_session()
    clock.advance(2)

    assert not session.poll_tick()
    assert not session.preview_visible
    session.preview()
    assert not session.preview_visible


def test_preview_window_restarts(host: GameHost, clock: FakeClock) -> None:
    session = host.start_topic(Topic.CULTURE, 4)

    session.preview()
    clock.advance(2)
    session.preview()
    clock.advance(2)
    assert session.preview_visible
    clock.advance(1)
    assert not session.preview_visible
