from heritage_puzzle.backend.models.besttimes import BestTimes, milestone_key, topic_key
from heritage_puzzle.backend.models.campaign import (
    Campaign,
    CampaignProgress,
    Milestone,
    MilestoneTracker,
    PuzzleImage,
)
from heritage_puzzle.backend.models.grid import Grid, Piece
from heritage_puzzle.backend.models.topic import Topic, check_difficulty
from heritage_puzzle.backend.models.user import User

__all__ = [
    "BestTimes",
    "Campaign",
    "CampaignProgress",
    "Grid",
    "Milestone",
    "MilestoneTracker",
    "Piece",
    "PuzzleImage",
    "Topic",
    "User",
    "check_difficulty",
    "milestone_key",
    "topic_key",
]
