"""Application-side bookkeeping around a puzzle round.

``GameHost`` plays the part of the app shell: it picks the picture,
starts rounds for a topic or a campaign milestone, and when a round
completes records the best time and milestone progress.  All state it
touches lives in the injected key-value store.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass

from heritage_puzzle.backend.auth import UserSession
from heritage_puzzle.backend.data import TOPIC_IMAGES, find_milestone
from heritage_puzzle.backend.engine.gameplay import PuzzleGame
from heritage_puzzle.backend.engine.gamestate import Clock
from heritage_puzzle.backend.engine.timers import IntervalTimer, PreviewTimer
from heritage_puzzle.backend.models import (
    BestTimes,
    MilestoneTracker,
    PuzzleImage,
    Topic,
    check_difficulty,
    milestone_key,
    topic_key,
)
from heritage_puzzle.backend.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionResult:
    elapsed_seconds: int
    moves: int
    is_new_best: bool
    best_time: int


class PlaySession:
    """One puzzle round plus its clock ticker and preview window."""

    def __init__(
        self,
        *,
        difficulty: int,
        topic: Topic,
        image: PuzzleImage,
        key: str,
        best_times: BestTimes,
        milestones: MilestoneTracker,
        milestone_id: str | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.key = key
        self.milestone_id = milestone_id
        self._best_times = best_times
        self._milestones = milestones
        self.best_time: int | None = best_times.get(key)
        self.result: CompletionResult | None = None
        self.closed = False

        timer_clock = clock or time.monotonic
        self._ticker = IntervalTimer(clock=timer_clock)
        self._preview = PreviewTimer(clock=timer_clock)
        self._ticker.start()

        # The game may complete during construction (a shuffle can land
        # on the solved layout), so everything above must already exist.
        self.game = PuzzleGame(
            difficulty,
            topic=topic,
            image=image,
            on_complete=self._on_complete,
            rng=rng,
            clock=clock or time.time,
        )

    # -- timers ---------------------------------------------------------------

    def poll_tick(self) -> bool:
        """True when the clock display should refresh."""
        return self._ticker.poll()

    def preview(self) -> None:
        """Show the reference picture, restarting any pending window."""
        if not self.closed:
            self._preview.show()

    @property
    def preview_visible(self) -> bool:
        return self._preview.visible

    # -- lifecycle ------------------------------------------------------------

    def reshuffle(self) -> None:
        if self.closed:
            return
        self.result = None
        self.best_time = self._best_times.get(self.key)
        self._ticker.start()
        self.game.reshuffle()

    def close(self) -> None:
        self._ticker.cancel()
        self._preview.cancel()
        self.closed = True

    # -- helpers --------------------------------------------------------------

    def _on_complete(self, elapsed: int, moves: int) -> None:
        self._ticker.cancel()
        previous = self._best_times.get(self.key)
        is_new_best = self._best_times.record(self.key, elapsed)
        if self.milestone_id is not None:
            self._milestones.mark_completed(self.milestone_id)
        best = elapsed if previous is None or is_new_best else previous
        self.result = CompletionResult(
            elapsed_seconds=elapsed,
            moves=moves,
            is_new_best=is_new_best,
            best_time=best,
        )


class GameHost:
    """Starts puzzle rounds and owns the persistent progression state."""

    def __init__(
        self,
        store: KeyValueStore,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.store = store
        self.best_times = BestTimes(store)
        self.milestones = MilestoneTracker(store)
        self.users = UserSession(store)
        self._rng = rng or random.Random()
        self._clock = clock
        self.session: PlaySession | None = None

    # -- starting rounds ------------------------------------------------------

    def start_topic(self, topic: Topic | str, difficulty: int) -> PlaySession:
        topic = Topic(topic)
        check_difficulty(difficulty)
        image = self._rng.choice(TOPIC_IMAGES[topic])
        return self._start(
            difficulty=difficulty,
            topic=topic,
            image=image,
            key=topic_key(topic, difficulty),
        )

    def start_milestone(self, milestone_id: str, difficulty: int) -> PlaySession:
        """Start a campaign milestone.

        Raises ``KeyError`` for an unknown milestone and ``PermissionError``
        when campaigns are not available to the player or the milestone is
        still locked.
        """
        check_difficulty(difficulty)
        campaign, milestone = find_milestone(milestone_id)
        if not self.users.can_access_campaigns:
            raise PermissionError("Historical campaigns require an Advantage membership.")
        if not self.milestones.is_unlocked(campaign, milestone):
            raise PermissionError(
                f"Complete the previous milestone of {campaign.title!r} first."
            )
        return self._start(
            difficulty=difficulty,
            topic=Topic.HISTORY,
            image=milestone.image,
            key=milestone_key(milestone.id, difficulty),
            milestone_id=milestone.id,
        )

    def end_session(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    # -- helpers --------------------------------------------------------------

    def _start(self, **kwargs) -> PlaySession:
        self.end_session()
        self.session = PlaySession(
            best_times=self.best_times,
            milestones=self.milestones,
            rng=self._rng,
            clock=self._clock,
            **kwargs,
        )
        logger.info(
            "Started %s (%dx%d)",
            self.session.key,
            kwargs["difficulty"],
            kwargs["difficulty"],
        )
        return self.session
