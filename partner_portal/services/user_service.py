from __future__ import annotations

import logging
import secrets

from passlib.context import CryptContext

from partner_portal.exceptions import AuthenticationError
from partner_portal.models import User
from partner_portal.schemas.user import ExternalIdentity, UserCreate
from partner_portal.store import PortalStore


logger = logging.getLogger("portal.users")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


class UserService:
    def __init__(self, store: PortalStore) -> None:
        self.store = store

    async def create_user(self, payload: UserCreate) -> User:
        data = payload.model_dump(exclude={"password"})
        data["password_hash"] = hash_password(payload.password)
        try:
            user = await self.store.create_user(data)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.store.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed username=%s", username)
            raise AuthenticationError("Invalid credentials")
        return user

    async def upsert_external(self, identity: ExternalIdentity) -> User:
        """Find or create the local user for an externally authenticated identity."""

        user = await self.store.get_user_by_username(identity.username)
        if user is not None:
            return user

        user = await self.create_user(
            UserCreate(
                username=identity.username,
                # Never used for login; external users authenticate upstream.
                password=secrets.token_urlsafe(32),
                full_name=identity.name or identity.username,
                email=identity.username,
                role="partner",
            )
        )
        logger.info("external_user_created user_id=%s account_id=%s", user.id, identity.account_id)
        return user
