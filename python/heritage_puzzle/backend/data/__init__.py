from heritage_puzzle.backend.data.content import (
    HISTORICAL_CAMPAIGNS,
    TOPIC_IMAGES,
    find_campaign,
    find_milestone,
)

__all__ = ["HISTORICAL_CAMPAIGNS", "TOPIC_IMAGES", "find_campaign", "find_milestone"]
