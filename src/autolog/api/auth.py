"""Bearer authentication for the API."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from autolog.database import get_db
from autolog.models import Account, Profile
from autolog.services.account_service import AccountService, TokenError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Principal:
    """The authenticated account making a request, and its profile if it has one."""

    account: Account
    profile: Profile | None


async def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Resolve the ``Authorization: Bearer <token>`` header to a Principal.

    Raises 401 when the header is missing, the token does not verify,
    or no account currently holds the token's seed.
    """
    if credentials is None or not credentials.credentials.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    service = AccountService(db)
    try:
        account = await service.authenticate(credentials.credentials.strip())
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Principal(account=account, profile=account.profile)


# Dependency for use in routes
RequirePrincipal = Annotated[Principal, Depends(get_principal)]
