"""Password hashing."""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Verified against when the email is unknown, so both failure paths cost the same
_DUMMY_HASH = pwd_context.hash("sweetshop-dummy-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against ``password_hash``.

    With no hash (unknown account) a dummy hash is still verified and the
    result is always False.
    """
    if password_hash is None:
        pwd_context.verify(password or "", _DUMMY_HASH)
        return False
    return pwd_context.verify(password or "", password_hash)
