"""The persisted "current session" of a signed-in user, keyed by its bearer token."""

import secrets
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from identity.domain import identity


@identity.aggregate(schema_name="sessions")
class Session:
    # ``id`` is the opaque bearer token
    user_id = Identifier(required=True)
    created_at = DateTime()
    ended_at = DateTime()

    @classmethod
    def start(cls, user):
        return cls(id=secrets.token_urlsafe(32), user_id=user.id, created_at=datetime.now(UTC))

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def end(self):
        if self.is_active:
            self.ended_at = datetime.now(UTC)
