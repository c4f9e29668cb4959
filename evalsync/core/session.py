import logging
from typing import Optional

from evalsync.schemas.auth import User

logger = logging.getLogger(__name__)


class AuthSession:
    """In-memory bearer token holder. Nothing is persisted between runs."""

    def __init__(self) -> None:
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self.expired = False

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set(self, user: User, token: str) -> None:
        self.user = user
        self.token = token
        self.expired = False

    def clear(self, expired: bool = False) -> None:
        if expired and self.token is not None:
            logger.info("session expired for %s", self.user.email if self.user else "<unknown>")
        self.user = None
        self.token = None
        self.expired = expired
