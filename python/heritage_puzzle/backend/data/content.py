"""Static puzzle content: topic pictures and the historical campaigns."""

from __future__ import annotations

from heritage_puzzle.backend.models.campaign import Campaign, Milestone, PuzzleImage
from heritage_puzzle.backend.models.topic import Topic

_UNSPLASH = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80"
_PLACEHOLDER = "/placeholder.svg"

TOPIC_IMAGES: dict[Topic, tuple[PuzzleImage, ...]] = {
    Topic.HISTORY: (
        PuzzleImage(
            url=_UNSPLASH.format("photo-1466442929976-97f336a657be"),
            title="Temple Architecture",
            description=(
                "Ancient Vietnamese temple showcasing traditional architectural "
                "elements and spiritual significance in Vietnamese culture."
            ),
        ),
        PuzzleImage(
            url=_UNSPLASH.format("photo-1551038247-3d9af20df552"),
            title="Historical Building",
            description=(
                "A beautiful example of colonial architecture that represents the "
                "intersection of Vietnamese and French influences."
            ),
        ),
    ),
    Topic.CULTURE: (
        PuzzleImage(
            url=_UNSPLASH.format("photo-1472396961693-142e6e269027"),
            title="Natural Heritage",
            description=(
                "Vietnamese natural landscapes that have inspired countless works "
                "of art and traditional poetry throughout history."
            ),
        ),
        PuzzleImage(
            url=_UNSPLASH.format("photo-1426604966848-d7adac402bff"),
            title="Cultural Landscape",
            description=(
                "Traditional Vietnamese rural scenery that reflects the harmony "
                "between people and nature in Vietnamese philosophy."
            ),
        ),
    ),
}


def _milestone(id: str, order: int, title: str, description: str) -> Milestone:
    return Milestone(
        id=id, title=title, description=description, image_url=_PLACEHOLDER, order=order
    )


HISTORICAL_CAMPAIGNS: tuple[Campaign, ...] = (
    Campaign(
        id="trung-sisters",
        title="Trưng Sisters' Uprising",
        period="40-43 AD",
        description=(
            "The first major rebellion against Chinese domination, led by the "
            "legendary Trưng sisters."
        ),
        image_url=_PLACEHOLDER,
        order=1,
        milestones=(
            _milestone(
                "trung-sisters-1", 1, "The Call to Arms",
                "Trưng Trắc and Trưng Nhị rally the Vietnamese people against "
                "Chinese oppression.",
            ),
            _milestone(
                "trung-sisters-2", 2, "Victory at Mê Linh",
                "The sisters lead their forces to victory, establishing an "
                "independent kingdom.",
            ),
            _milestone(
                "trung-sisters-3", 3, "The Final Stand",
                "The heroic last battle and sacrifice of the Trưng sisters for "
                "Vietnamese independence.",
            ),
        ),
    ),
    Campaign(
        id="bach-dang",
        title="Ngô Quyền's Victory at Bạch Đằng",
        period="938 AD",
        description=(
            "The decisive naval battle that ended Chinese domination and "
            "established Vietnamese independence."
        ),
        image_url=_PLACEHOLDER,
        order=2,
        milestones=(
            _milestone(
                "bach-dang-1", 1, "The Southern Han Invasion",
                "Chinese forces launch a massive naval invasion through the "
                "Bạch Đằng River.",
            ),
            _milestone(
                "bach-dang-2", 2, "The Clever Trap",
                "Ngô Quyền strategically places iron-tipped stakes beneath the "
                "river surface.",
            ),
            _milestone(
                "bach-dang-3", 3, "Victory and Independence",
                "The Chinese fleet is destroyed, securing Vietnamese "
                "independence for centuries.",
            ),
        ),
    ),
    Campaign(
        id="mongol-invasions",
        title="Trần Dynasty & Mongol Invasions",
        period="1225-1400 AD",
        description=(
            "Three heroic defenses against the mighty Mongol Empire under the "
            "Trần dynasty."
        ),
        image_url=_PLACEHOLDER,
        order=3,
        milestones=(
            _milestone(
                "mongol-1", 1, "First Mongol Invasion",
                "Trần Thủ Độ leads the defense against the first Mongol assault "
                "in 1258.",
            ),
            _milestone(
                "mongol-2", 2, "Second Mongol Invasion",
                "Trần Hưng Đạo defeats a larger Mongol force in 1285.",
            ),
            _milestone(
                "mongol-3", 3, "Third Victory at Bạch Đằng",
                "The final defeat of Mongol naval forces using the famous stake "
                "trap strategy.",
            ),
        ),
    ),
    Campaign(
        id="lam-son",
        title="Lam Sơn Uprising",
        period="1418-1428 AD",
        description="Lê Lợi leads a peasant rebellion to expel Chinese Ming occupation.",
        image_url=_PLACEHOLDER,
        order=4,
        milestones=(
            _milestone(
                "lam-son-1", 1, "The Uprising Begins",
                "Lê Lợi starts the rebellion from his home base in Lam Sơn.",
            ),
            _milestone(
                "lam-son-2", 2, "Guerrilla Warfare",
                "Vietnamese forces use innovative guerrilla tactics against "
                "Ming armies.",
            ),
            _milestone(
                "lam-son-3", 3, "Victory and the Lê Dynasty",
                "Final expulsion of Chinese forces and establishment of the "
                "Lê dynasty.",
            ),
        ),
    ),
)


# -- lookups ------------------------------------------------------------------


def find_campaign(campaign_id: str) -> Campaign:
    for campaign in HISTORICAL_CAMPAIGNS:
        if campaign.id == campaign_id:
            return campaign
    raise KeyError(f"Unknown campaign {campaign_id!r}")


def find_milestone(milestone_id: str) -> tuple[Campaign, Milestone]:
    """Return the milestone with *milestone_id* and the campaign holding it."""
    for campaign in HISTORICAL_CAMPAIGNS:
        for milestone in campaign.milestones:
            if milestone.id == milestone_id:
                return campaign, milestone
    raise KeyError(f"Unknown milestone {milestone_id!r}")
