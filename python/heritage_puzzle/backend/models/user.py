"""The locally simulated player account."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class User:
    id: str
    email: str
    name: str | None = None
    has_advantage: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["hasAdvantage"] = data.pop("has_advantage")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> User:
        """Rebuild a user from its stored form.

        Raises ``KeyError`` or ``TypeError`` when required fields are
        missing or of the wrong shape.
        """
        if not isinstance(data["id"], str) or not isinstance(data["email"], str):
            raise TypeError("User id and email must be strings.")
        return cls(
            id=data["id"],
            email=data["email"],
            name=data.get("name"),
            has_advantage=bool(data.get("hasAdvantage", False)),
        )
