"""Account creation and bearer token handling."""

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from autolog.config import get_settings
from autolog.models import Account, Profile

JWT_ALGORITHM = "HS256"


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def encode_token(token_seed: str) -> str:
    """Sign a bearer token carrying ``token_seed``."""
    settings = get_settings()
    return jwt.encode({"tokenSeed": token_seed}, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> str:
    """Verify a bearer token and return its token seed."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        raise TokenError(f"invalid token: {e}") from e

    token_seed = payload.get("tokenSeed")
    if not isinstance(token_seed, str) or not token_seed:
        raise TokenError("token missing tokenSeed")
    return token_seed


class AccountService:
    """Service for accounts and their profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Account | None:
        """Get an account by username."""
        result = await self.db.execute(
            select(Account)
            .options(selectinload(Account.profile))
            .where(Account.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_token_seed(self, token_seed: str) -> Account | None:
        """Get the account currently holding ``token_seed``."""
        result = await self.db.execute(
            select(Account)
            .options(selectinload(Account.profile))
            .where(Account.token_seed == token_seed)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        username: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> Account:
        """Create an account together with its profile."""
        account = Account(username=username)
        account.profile = Profile(first_name=first_name, last_name=last_name)
        self.db.add(account)
        await self.db.flush()
        return account

    async def issue_token(self, account: Account) -> str:
        """Rotate the account's token seed and return a new bearer token."""
        token_seed = account.rotate_token_seed()
        await self.db.flush()
        return encode_token(token_seed)

    async def authenticate(self, token: str) -> Account:
        """Resolve a bearer token to its account."""
        token_seed = decode_token(token)
        account = await self.get_by_token_seed(token_seed)
        if account is None:
            raise TokenError("no account for token")
        return account
