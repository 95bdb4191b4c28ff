"""User and Credential aggregates.

A User is the public face of an account and can be listed or exported freely.
The secret half lives in a separate Credential aggregate keyed by the same id,
so nothing that reads users ever touches a password hash.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.domain import identity
from identity.shared.email import normalize_email
from identity.user.passwords import hash_password


@identity.aggregate(schema_name="users")
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    created_at = DateTime()

    @classmethod
    def register(cls, email, name):
        """Create a new user with a fresh id.

        The email is normalized; the name is trimmed and must not be empty.
        """
        errors = {}
        try:
            email = normalize_email(email)
        except ValidationError as exc:
            errors.update(exc.messages)

        name = (name or "").strip()
        if not name:
            errors["name"] = ["Name is required"]

        if errors:
            raise ValidationError(errors)

        return cls(name=name, email=email, created_at=datetime.now(UTC))


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self.query.filter(email=email).all().first

    def list_all(self) -> list[User]:
        """Every user, oldest first."""
        return self.query.limit(None).order_by("created_at").all().items


@identity.aggregate(schema_name="credentials")
class Credential:
    # ``id`` is the owning user's id
    password_hash = String(required=True, max_length=255, sanitize=False)
    created_at = DateTime()

    @classmethod
    def for_user(cls, user, password):
        if not password:
            raise ValidationError({"password": ["Password is required"]})
        return cls(id=user.id, password_hash=hash_password(password), created_at=user.created_at)
