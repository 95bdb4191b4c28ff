"""Email address normalization and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lower-cased) form of ``email``.

    Enforces structural validity: exactly one @, non-empty local and domain
    parts, a dotted domain, no consecutive dots, no whitespace or forbidden
    characters. Raises ``ValidationError`` otherwise.
    """
    email = (email or "").strip().lower()

    if not email:
        raise ValidationError({"email": ["Email is required"]})

    if any(ch in email for ch in (" ", "\t", "\n")):
        raise _invalid(email)

    if email.count("@") != 1:
        raise _invalid(email)

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise _invalid(email)

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise _invalid(email)

    if "." not in domain_part:
        raise _invalid(email)

    # Each label of the domain must not start or end with a hyphen
    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise _invalid(email)

    if ".." in local_part or ".." in domain_part:
        raise _invalid(email)

    if any(forbidden in email for forbidden in _FORBIDDEN):
        raise _invalid(email)

    return email
