"""Local stand-in for sign-in and the Advantage membership.

Nothing leaves the machine: any non-empty email/password pair signs in
and the resulting account is stored next to the rest of the game data.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace

from heritage_puzzle.backend.models.user import User
from heritage_puzzle.backend.storage import KeyValueStore, load_json, save_json
from heritage_puzzle.config import USER_KEY

logger = logging.getLogger(__name__)


class UserSession:
    """The signed-in player, if any."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.user: User | None = None
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        data = load_json(self.store, USER_KEY, None, dict)
        if data is None:
            return
        try:
            self.user = User.from_dict(data)
        except (KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed stored user: %s", exc)

    def _save(self, user: User) -> None:
        save_json(self.store, USER_KEY, user.to_dict())

    # -- queries --------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def can_access_campaigns(self) -> bool:
        return self.user is not None and self.user.has_advantage

    # -- actions --------------------------------------------------------------

    def login(self, email: str, password: str) -> bool:
        return self._sign_in(email, password)

    def register(self, email: str, password: str, name: str | None = None) -> bool:
        return self._sign_in(email, password, name or None)

    def logout(self) -> None:
        self.user = None
        self.store.remove(USER_KEY)
        logger.info("Signed out")

    def upgrade_to_advantage(self) -> bool:
        if self.user is None:
            return False
        self.user = replace(self.user, has_advantage=True)
        self._save(self.user)
        logger.info("Upgraded %s to Advantage", self.user.email)
        return True

    # -- helpers --------------------------------------------------------------

    def _sign_in(self, email: str, password: str, name: str | None = None) -> bool:
        if not email or not password:
            return False
        self.user = User(
            id=str(int(time.time() * 1000)),
            email=email,
            name=name,
            has_advantage=False,
        )
        self._save(self.user)
        logger.info("Signed in as %s", email)
        return True
