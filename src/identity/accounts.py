"""Account use cases: signup, login, logout and session resolution.

Users, credentials and sessions are separate aggregates. A session is the
persisted "current session" of a signed-in user; its id is the opaque bearer
token handed back to the client.

Signup and login run as application service use cases rather than commands,
so raw passwords are never written to the command log.
"""

from protean import handle, use_case
from protean.exceptions import ValidationError
from protean.fields import Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.email import normalize_email
from identity.user.passwords import verify_password
from identity.user.session import Session
from identity.user.user import Credential, User
from shared.exceptions import DuplicateEmailError, InvalidCredentialsError, UnauthenticatedError
from shared.logging import get_logger

logger = get_logger(__name__)


@identity.application_service(part_of=User)
class AccountService:
    @use_case
    def signup(self, email: str, password: str, name: str) -> tuple[User, Session]:
        """Register a new account and sign it in."""
        errors = {}
        try:
            user = User.register(email=email, name=name)
        except ValidationError as exc:
            errors.update(exc.messages)
            user = None
        if not password:
            errors["password"] = ["Password is required"]
        if errors:
            raise ValidationError(errors)

        users = current_domain.repository_for(User)
        if users.find_by_email(user.email) is not None:
            logger.info("Signup rejected: duplicate email", email=user.email)
            raise DuplicateEmailError()

        session = Session.start(user)
        users.add(user)
        current_domain.repository_for(Credential).add(Credential.for_user(user, password))
        current_domain.repository_for(Session).add(session)

        logger.info("User signed up", user_id=user.id)
        return user, session

    @use_case
    def login(self, email: str, password: str) -> tuple[User, Session]:
        """Start a session for the account matching ``email`` and ``password``.

        Unknown emails and wrong passwords fail identically.
        """
        try:
            email = normalize_email(email)
        except ValidationError:
            email = None

        user = current_domain.repository_for(User).find_by_email(email) if email else None
        credential = current_domain.repository_for(Credential).get_or_none(user.id) if user is not None else None

        if not verify_password(password, credential.password_hash if credential else None):
            logger.info("Login failed")
            raise InvalidCredentialsError()

        session = Session.start(user)
        current_domain.repository_for(Session).add(session)
        logger.info("User logged in", user_id=user.id)
        return user, session


@identity.command(part_of="Session")
class EndSession:
    """Sign out the session identified by its bearer token."""

    token: Text(required=True, sanitize=False)


@identity.command_handler(part_of=Session)
class SessionHandler:
    @handle(EndSession)
    def end_session(self, command):
        repo = current_domain.repository_for(Session)
        session = repo.get_or_none(command.token)
        if session is None or not session.is_active:
            return
        session.end()
        repo.add(session)
        logger.info("User logged out", user_id=session.user_id)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def current_user(token: str | None) -> User | None:
    """Return the user owning the active session ``token``, or None."""
    if not token:
        return None
    session = current_domain.repository_for(Session).get_or_none(token)
    if session is None or not session.is_active:
        return None
    return current_domain.repository_for(User).get_or_none(session.user_id)


def require_user(token: str | None) -> User:
    user = current_user(token)
    if user is None:
        raise UnauthenticatedError()
    return user


def is_authenticated(token: str | None) -> bool:
    return current_user(token) is not None


def list_users() -> list[User]:
    return current_domain.repository_for(User).list_all()
