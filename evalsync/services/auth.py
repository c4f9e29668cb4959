import logging

from evalsync.api import auth as auth_api
from evalsync.core.context import SyncContext
from evalsync.schemas.auth import LoginRequest, RegisterRequest, User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, ctx: SyncContext):
        self.ctx = ctx

    async def login(self, email: str, password: str) -> User:
        result = await auth_api.login(self.ctx.http, LoginRequest(email=email, password=password))
        self.ctx.session.set(result.user, result.token)
        logger.info("logged in as %s", result.user.email)
        return result.user

    async def register(self, name: str, email: str, password: str) -> User:
        payload = RegisterRequest(name=name, email=email, password=password)
        result = await auth_api.register(self.ctx.http, payload)
        self.ctx.session.set(result.user, result.token)
        logger.info("registered %s", result.user.email)
        return result.user

    def logout(self) -> None:
        self.ctx.session.clear()
        self.ctx.store.clear()
