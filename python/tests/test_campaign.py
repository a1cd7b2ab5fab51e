"""Campaign content, milestone unlocking, and progress."""

from __future__ import annotations

import json

import pytest

from heritage_puzzle.backend.data import HISTORICAL_CAMPAIGNS, find_campaign, find_milestone
from heritage_puzzle.backend.models import MilestoneTracker
from heritage_puzzle.backend.storage import MemoryStore
from heritage_puzzle.config import COMPLETED_MILESTONES_KEY


# -- static content -----------------------------------------------------------


def test_campaigns_are_ordered_with_three_milestones() -> None:
    assert [c.order for c in HISTORICAL_CAMPAIGNS] == [1, 2, 3, 4]
    for campaign in HISTORICAL_CAMPAIGNS:
        assert [m.order for m in campaign.milestones] == [1, 2, 3]


def test_milestone_ids_are_unique() -> None:
    ids = [m.id for c in HISTORICAL_CAMPAIGNS for m in c.milestones]
    assert len(ids) == len(set(ids))


def test_lookups() -> None:
    campaign, milestone = find_milestone("mongol-2")

    assert campaign is find_campaign("mongol-invasions")
    assert milestone.title == "Second Mongol Invasion"
    assert milestone.image.title == milestone.title


@pytest.mark.parametrize("lookup", [find_campaign, find_milestone])
def test_unknown_ids_raise(lookup) -> None:
    with pytest.raises(KeyError):
        lookup("no-such-thing")


# -- tracker ------------------------------------------------------------------


def test_mark_completed_is_idempotent(store: MemoryStore) -> None:
    tracker = MilestoneTracker(store)

    tracker.mark_completed("bach-dang-1")
    tracker.mark_completed("bach-dang-1")

    assert tracker.completed() == ["bach-dang-1"]
    assert json.loads(store.get(COMPLETED_MILESTONES_KEY)) == ["bach-dang-1"]


def test_completed_list_is_append_only(store: MemoryStore) -> None:
    tracker = MilestoneTracker(store)

    for milestone_id in ("lam-son-1", "mongol-1", "lam-son-2", "mongol-1"):
        tracker.mark_completed(milestone_id)

    assert tracker.completed() == ["lam-son-1", "mongol-1", "lam-son-2"]


def test_milestones_unlock_in_order(store: MemoryStore) -> None:
    tracker = MilestoneTracker(store)
    campaign = find_campaign("trung-sisters")
    first, second, third = campaign.milestones

    assert tracker.is_unlocked(campaign, first)
    assert not tracker.is_unlocked(campaign, second)
    assert not tracker.is_unlocked(campaign, third)

    tracker.mark_completed(first.id)
    assert tracker.is_unlocked(campaign, second)
    assert not tracker.is_unlocked(campaign, third)


def test_progress(store: MemoryStore) -> None:
    tracker = MilestoneTracker(store)
    campaign = find_campaign("bach-dang")

    tracker.mark_completed("bach-dang-1")
    tracker.mark_completed("trung-sisters-1")
    progress = tracker.progress(campaign)

    assert (progress.completed, progress.total) == (1, 3)
    assert not progress.is_complete

    tracker.mark_completed("bach-dang-2")
    tracker.mark_completed("bach-dang-3")
    assert tracker.progress(campaign).is_complete


def test_malformed_completed_list_reads_as_empty() -> None:
    store = MemoryStore({COMPLETED_MILESTONES_KEY: json.dumps({"oops": 1})})

    assert MilestoneTracker(store).completed() == []
