"""Historical campaigns, their milestones, and completion progress."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from heritage_puzzle.backend.storage import KeyValueStore, load_json, save_json
from heritage_puzzle.config import COMPLETED_MILESTONES_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PuzzleImage:
    url: str
    title: str
    description: str


@dataclass(frozen=True)
class Milestone:
    id: str
    title: str
    description: str
    image_url: str
    order: int

    @property
    def image(self) -> PuzzleImage:
        return PuzzleImage(url=self.image_url, title=self.title, description=self.description)


@dataclass(frozen=True)
class Campaign:
    id: str
    title: str
    period: str
    description: str
    image_url: str
    order: int
    milestones: tuple[Milestone, ...] = field(default_factory=tuple)

    def milestone_by_order(self, order: int) -> Milestone | None:
        for milestone in self.milestones:
            if milestone.order == order:
                return milestone
        return None


@dataclass(frozen=True)
class CampaignProgress:
    completed: int
    total: int

    @property
    def is_complete(self) -> bool:
        return self.completed == self.total

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 0.0


class MilestoneTracker:
    """Append-only list of completed milestone ids."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def completed(self) -> list[str]:
        data = load_json(self.store, COMPLETED_MILESTONES_KEY, [], list)
        return [m for m in data if isinstance(m, str)]

    def is_completed(self, milestone_id: str) -> bool:
        return milestone_id in self.completed()

    def mark_completed(self, milestone_id: str) -> None:
        """Add *milestone_id* to the completed list; re-adding is a no-op."""
        done = self.completed()
        if milestone_id in done:
            return
        done.append(milestone_id)
        save_json(self.store, COMPLETED_MILESTONES_KEY, done)
        logger.info("Milestone %s completed", milestone_id)

    def is_unlocked(self, campaign: Campaign, milestone: Milestone) -> bool:
        """The first milestone is always open; later ones need their predecessor."""
        if milestone.order == 1:
            return True
        previous = campaign.milestone_by_order(milestone.order - 1)
        return previous is not None and self.is_completed(previous.id)

    def progress(self, campaign: Campaign) -> CampaignProgress:
        done = set(self.completed())
        return CampaignProgress(
            completed=sum(1 for m in campaign.milestones if m.id in done),
            total=len(campaign.milestones),
        )
