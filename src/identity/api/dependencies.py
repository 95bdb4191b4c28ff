"""Request dependencies resolving the signed-in user.

They activate the identity domain explicitly, so routers owned by other
domains can depend on them too.
"""

from fastapi import Header

from identity import accounts
from identity.domain import identity
from identity.user.user import User


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def optional_user(authorization: str | None = Header(None)) -> User | None:
    with identity.domain_context():
        return accounts.current_user(bearer_token(authorization))


async def require_user(authorization: str | None = Header(None)) -> User:
    with identity.domain_context():
        return accounts.require_user(bearer_token(authorization))
